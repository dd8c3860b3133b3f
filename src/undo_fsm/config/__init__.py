"""FSM configuration system for loading, validating, and building FSM instances.

This package provides:
- **schema**: Pydantic schemas defining FSM configuration structure
- **loader**: Load FSM configurations from files and dicts
- **validator**: Validate FSM configurations and report problems
- **builder**: Assemble configurations and FSM instances in code

Configuration files can be JSON or YAML format and define the initial
state and each state's event transitions.
"""

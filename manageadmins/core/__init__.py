"""Core Application Layer: Orchestrates the administrator management use cases.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the command handler and the lookup helpers it relies on.
"""

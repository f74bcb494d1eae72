"""
Application Layer for the session tracking API.

This package contains:
- ports/: Abstract repository interfaces (what the domain needs)
- use_cases/: Session lifecycle workflows
- exceptions.py: Errors shared by use cases and adapters
"""

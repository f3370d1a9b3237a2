"""employee-tracker — interactive employee / role / department database CLI.

A menu-driven front end over a small relational schema, built with a
strict layered architecture (cli → core → infra).
"""

from employee_tracker.version import __version__

__all__: list[str] = ["__version__"]

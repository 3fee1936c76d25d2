"""
CLI Client Module.

Local command-line client built with Typer and Rich. It opens the note
store directly, the way the mobile app talks to its on-device database,
so no server needs to be running.

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py notes new "Groceries" --content "milk, eggs"
    python cli.py notes search milk
"""

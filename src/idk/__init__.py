"""
idk - natural-language assistant for the terminal (thin client).

The CLI collects local context (OS, working directory, readme, existing
script) and sends it to the idk backend, which returns a command, a script,
a project setup plan, or plain text. The CLI executes returned commands
locally after confirmation.

Usage:
    idk --login                       # Sign in with Google
    idk list all docker containers    # Run a prompt
    idk --readme ./README.md run it   # Prompt with readme context
    idk --logout
"""

__version__ = "1.0.0"
__author__ = "idk Team"

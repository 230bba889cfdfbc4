"""Main entry point for the Syllabus CLI.

Usage:
    python -m syllabus.main --help
    syllabus --help  # If installed via pip/uv
"""

from syllabus.cli import main

if __name__ == "__main__":
    main()

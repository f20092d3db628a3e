"""
This allows termwise to be run as a module with `python -m termwise`.
"""
from .main import main

if __name__ == "__main__":
    main()

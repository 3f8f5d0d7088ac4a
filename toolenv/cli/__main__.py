"""Allow running the CLI as: python -m toolenv.cli"""

from toolenv.cli.parser import main

if __name__ == "__main__":
    main()

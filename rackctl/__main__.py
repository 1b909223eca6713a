"""
CLI entry point, when used as a module: `python -m rackctl`.
"""
from rackctl import cli

if __name__ == '__main__':
    cli.main()

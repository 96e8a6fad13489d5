"""
__main__.py

This file adds support for running redwall as a python module instead of invoking the "redwall"
command line entrypoint:

    $ python -m redwall candidates
"""


from redwall.cli import main


if __name__ == "__main__":
    main()

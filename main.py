import sys

from redirector_app.cli import main

# Same entry point as the installed `redirector` console script
if __name__ == "__main__":
    sys.exit(main())

"""Allow ``python -m qt_project_setup``."""

from qt_project_setup.cli import main

if __name__ == "__main__":
    main()

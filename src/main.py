"""Entry point kept minimal by delegating to the application shell.

Parses the command line, registers every demo, creates the App (window,
scene, GUI) and runs the engine loop until the window closes.
"""

from typing import List, Optional

from app.app import App
from app.options import parse_options
from demos import build_registry


def main(argv: Optional[List[str]] = None) -> None:
    options = parse_options(argv)
    app = App.create(build_registry(), options)
    app.run()


if __name__ == "__main__":
    main()

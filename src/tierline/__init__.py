# SPDX-License-Identifier: MIT

from tierline.cleanup import register_cleanup
from tierline.initialize import initialize
from tierline.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()

"""``utility-billing-ui`` console script: start the Streamlit front end."""

from __future__ import annotations

import sys
from pathlib import Path

APP_PATH = Path(__file__).with_name("app.py")


def main() -> None:
    try:
        from streamlit.web import cli as stcli
    except ImportError as exc:
        raise ImportError(
            "Streamlit is required. Install with: pip install utility-billing-client[ui]"
        ) from exc

    sys.argv = ["streamlit", "run", str(APP_PATH), *sys.argv[1:]]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()

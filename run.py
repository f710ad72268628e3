"""Launch the watermark app with the Streamlit server settings it expects."""

import os
import sys

import streamlit.web.cli as stcli

APP_SCRIPT = "watermark_app.py"
SERVER_FLAGS = [
    "--server.maxUploadSize=200",
    "--browser.gatherUsageStats=false",
    "--global.developmentMode=false",
    "--client.toolbarMode=minimal",
]


def app_path() -> str:
    # PyInstaller bundles unpack next to sys._MEIPASS
    base = getattr(sys, "_MEIPASS", None) or os.path.dirname(os.path.abspath(__file__))
    return os.path.join(base, APP_SCRIPT)


def main():
    sys.argv = ["streamlit", "run", app_path(), *SERVER_FLAGS]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()

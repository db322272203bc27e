"""
Inventory Count - Launcher

Run this script to start the application:
    python run.py

This starts the Streamlit server and opens the app in a browser.
Access the app at: http://localhost:8501
"""

import subprocess
import sys
import time
import webbrowser
import os
from threading import Thread

PORT = int(os.getenv("PORT", "8501"))


def start_streamlit():
    """Start the Streamlit server and wait for it to exit."""
    app_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "app.py")
    return subprocess.call(
        [sys.executable, "-m", "streamlit", "run", app_path,
         f"--server.port={PORT}",
         "--server.headless=true"]
    )


def open_browser():
    """Open browser after a short delay."""
    time.sleep(2)
    webbrowser.open(f"http://localhost:{PORT}")


if __name__ == "__main__":
    print("=" * 50)
    print("  Inventory Count")
    print("=" * 50)
    print()
    print(f"App URL: http://localhost:{PORT}")
    print("Press Ctrl+C to stop the server")
    print("-" * 50)

    browser_thread = Thread(target=open_browser, daemon=True)
    browser_thread.start()

    try:
        sys.exit(start_streamlit())
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)

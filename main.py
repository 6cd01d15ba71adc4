"""
Review Prompter - Web Server Entry Point
========================================

Run this to start the admin panel:
    python main.py

Then open http://127.0.0.1:8000/login in your browser.
Set ADMIN_PASSWORD (and optionally ADMIN_USERNAME) to seed an administrator.
"""

import uvicorn


def main():
    """Start the web server."""
    print("\n" + "=" * 50)
    print("   Review Prompter - Admin Panel")
    print("=" * 50)
    print("\n   Starting server at http://127.0.0.1:8000")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "review_prompter.web.app:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info"
    )


if __name__ == "__main__":
    main()

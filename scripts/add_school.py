"""
Register a Driving School

Adds a driving school through the running proxy, the same way the admin
page does. The admin password is checked against ADMIN_PASSWORD first.

Usage:
    python scripts/add_school.py ABC123 "Premier Driving Academy" \\
        contact@school.com "Kochi" 1a2b3c4d5e6f7g8h9i0j
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from licensedesk.client import AdminConsole, IntakeClient  # noqa: E402
from licensedesk.core.logging_config import setup_logging  # noqa: E402


async def add_school(args: argparse.Namespace) -> int:
    """Log in to the admin console and submit one school."""
    async with IntakeClient(base_url=args.proxy) as client:
        console = AdminConsole(client)

        password = args.password or getpass.getpass("Admin password: ")
        if not await console.login(password):
            print("Admin login failed")
            return 1

        console.form.set("code", args.code)
        console.form.set("name", args.name)
        console.form.set("email", args.email)
        console.form.set("place", args.place)
        console.form.set("drive_folder_id", args.drive_folder_id)

        if not await console.add_school():
            print(f"Failed: {console.form.error}")
            return 1

        print(console.form.success)
        print(f"  Schools registered: {len(console.directory.schools)}")
        return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Register a driving school")
    parser.add_argument("code")
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("place")
    parser.add_argument("drive_folder_id")
    parser.add_argument("--proxy", default=None, help="Proxy base URL (default: PROXY_BASE_URL)")
    parser.add_argument("--password", default=None)
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(add_school(args)))


if __name__ == "__main__":
    main()

"""Print a signed bearer token for local development against a running API."""
import argparse

from campus_api.config import settings
from campus_api.security import create_access_token


def main():
    parser = argparse.ArgumentParser(description="Mint a development access token")
    parser.add_argument("subject", help="Token subject, e.g. an email address")
    parser.add_argument(
        "--role",
        action="append",
        default=[],
        dest="roles",
        help=f"Role to grant (repeatable). Use {settings.ADMIN_ROLE!r} for elevated access.",
    )
    parser.add_argument("--minutes", type=int, default=None, help="Lifetime in minutes")
    args = parser.parse_args()

    roles = args.roles or ["USER"]
    print(create_access_token(args.subject, roles, expires_minutes=args.minutes))


if __name__ == "__main__":
    main()

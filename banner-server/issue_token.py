"""
Issue an operator access token for the banner management API.

    python issue_token.py --subject ops@example.com
"""
import argparse

from banner_server.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a bearer token for operator endpoints")
    parser.add_argument("--subject", required=True, help="Who the token is issued to")
    parser.add_argument("--role", default="operator", choices=["operator", "admin"])
    args = parser.parse_args()

    token = create_access_token(args.subject, role=args.role)
    print("=" * 50)
    print(f"subject: {args.subject}")
    print(f"role: {args.role}")
    print("=" * 50)
    print(token)


if __name__ == "__main__":
    main()

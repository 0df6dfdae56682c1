### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - Operator CLI -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
CaseDesk - Command Line Interface

Operator commands:
- serve: run the API with uvicorn
- init-db: create all tables
- init-config: write the default config.yaml
- create-tenant: onboard a tenant and its first Tenant Admin
"""

import argparse
import getpass
import sys
from datetime import datetime
from pathlib import Path

import uvicorn

from casedesk import __version__
from casedesk.config import get_api_settings, get_config_path, write_default_config
from casedesk.services.errors import ServiceError
from casedesk.utils import get_logger

logger = get_logger("casedesk.cli")


def run_server(host: str | None, port: int | None, reload: bool = False) -> None:
    """Run the uvicorn server"""
    settings = get_api_settings()
    uvicorn.run(
        "casedesk.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def init_database() -> int:
    from casedesk.database import init_db

    init_db()
    print("Database tables created.")
    return 0


def init_config(path: str | None, force: bool) -> int:
    target = Path(path) if path else get_config_path()
    if target.exists() and not force:
        print(f"Config already exists at {target} (use --force to overwrite)")
        return 1
    written = write_default_config(str(target))
    print(f"Default configuration written to {written}")
    return 0


def create_tenant(args: argparse.Namespace) -> int:
    from casedesk.database import SessionLocal, init_db
    from casedesk.services.tenants import onboard_tenant

    password = args.admin_password or getpass.getpass("Admin password: ")
    subscription_end = datetime.fromisoformat(args.subscription_end) if args.subscription_end else None

    init_db()
    db = SessionLocal()
    try:
        tenant, admin = onboard_tenant(
            db,
            name=args.name,
            slug=args.slug,
            tax_id=args.tax_id,
            email=args.email,
            licenses_total=args.licenses,
            admin_email=args.admin_email,
            admin_password=password,
            admin_first_name=args.admin_first_name,
            admin_last_name=args.admin_last_name,
            subscription_plan=args.plan,
            subscription_end=subscription_end,
        )
    except ServiceError as e:
        logger.error(f"Could not create tenant: {e.message}")
        return 1
    finally:
        db.close()

    print()
    print("=" * 50)
    print(f"  Tenant created: {tenant.name} ({tenant.slug})")
    print("=" * 50)
    print(f"  Licenses:    {tenant.licenses_in_use}/{tenant.licenses_total}")
    print(f"  Admin login: {admin.email}")
    print(f"  Header:      X-Tenant-Slug: {tenant.slug}")
    print("=" * 50)
    print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="casedesk",
        description="CaseDesk - Multi-tenant HR Case Management API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m casedesk.cli serve --port 8000
  python -m casedesk.cli init-db
  python -m casedesk.cli create-tenant --name "Acme" --slug acme --tax-id 76.123.456-7 \\
      --email hr@acme.test --licenses 50 --admin-email admin@acme.test
""",
    )
    parser.add_argument("--version", "-v", action="version", version=f"CaseDesk {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", help="Host to bind to (default: from settings)")
    serve.add_argument("--port", "-p", type=int, help="Port to listen on (default: from settings)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes (development)")

    subparsers.add_parser("init-db", help="Create database tables")

    config = subparsers.add_parser("init-config", help="Write the default config.yaml")
    config.add_argument("--path", help="Target file (default: CASEDESK_CONFIG_PATH or data/config.yaml)")
    config.add_argument("--force", action="store_true", help="Overwrite an existing file")

    tenant = subparsers.add_parser("create-tenant", help="Onboard a tenant and its first Tenant Admin")
    tenant.add_argument("--name", required=True)
    tenant.add_argument("--slug", required=True, help="Lowercase letters, digits and hyphens")
    tenant.add_argument("--tax-id", required=True)
    tenant.add_argument("--email", required=True, help="Tenant contact email")
    tenant.add_argument("--licenses", type=int, default=10, help="Total user licenses (default: 10)")
    tenant.add_argument("--plan", choices=["Basic", "Standard", "Premium"], default="Basic")
    tenant.add_argument("--subscription-end", help="ISO date the subscription ends")
    tenant.add_argument("--admin-email", required=True)
    tenant.add_argument("--admin-password", help="Prompted for when omitted")
    tenant.add_argument("--admin-first-name", default="Admin")
    tenant.add_argument("--admin-last-name", default="User")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        run_server(args.host, args.port, reload=args.reload)
        return 0
    if args.command == "init-db":
        return init_database()
    if args.command == "init-config":
        return init_config(args.path, args.force)
    if args.command == "create-tenant":
        return create_tenant(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())

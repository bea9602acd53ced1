#!/usr/bin/env python3
"""Operational helpers for an intranet kept in a JSON-file store."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import timedelta
from typing import Any

from intranet_core_api.auth.passwords import hash_password
from intranet_core_api.intranet import Intranet
from intranet_core_api.models.billing import RazorpayConfig
from intranet_core_api.models.company import PlanType, RenewalStatus
from intranet_core_api.models.space import SpaceRole
from intranet_core_api.models.user import UserStatus
from intranet_core_lib.impl.settings.logging_settings import LoggingSettings
from intranet_core_lib.impl.settings.store_settings import StoreSettings
from intranet_core_lib.impl.store.json_file_store import JsonFileKeyValueStore
from intranet_core_lib.log_setup import configure_logging
from intranet_core_lib.principal import RoleType

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"
DEMO_INVITE_CODE = "DEMO123"


def open_intranet(store_dir: str | None = None, key_prefix: str | None = None) -> Intranet:
    overrides: dict[str, Any] = {}
    if store_dir:
        overrides["root_dir"] = store_dir
    if key_prefix is not None:
        overrides["key_prefix"] = key_prefix
    return Intranet(JsonFileKeyValueStore(StoreSettings(**overrides)))


def seed_demo(intranet: Intranet) -> dict[str, Any]:
    """Create the demo tenant and the platform tenant unless users already exist."""
    repositories = intranet.repositories
    if repositories.users.all():
        return {"seeded": False, "reason": "store already contains users"}

    now = intranet.plan_gate.now()
    next_month = now + timedelta(days=intranet.plan_settings.trial_days)
    repositories.razorpay_config.save(RazorpayConfig(key_id="rzp_test_demo_123", key_secret="secret"))

    demo = repositories.companies.create(
        company_name="Demo Corp",
        primary_admin_email="admin@demo.com",
        created_on=now,
        primary_color="#dc2626",
        secondary_color="#f9fafb",
        accent_color="#b91c1c",
        home_title="Welcome to Demo Corp Portal",
        show_logo_in_header=False,
        plan_type=PlanType.BASIC,
        max_users=intranet.plan_settings.basic_max_users,
        invite_code=DEMO_INVITE_CODE,
        subscription_start_date=now,
        subscription_end_date=next_month,
        is_subscription_active=True,
        renewal_status=RenewalStatus.ACTIVE,
    )
    admin = repositories.users.create(
        full_name="Demo Admin",
        email="admin@demo.com",
        password_hash=hash_password(DEMO_PASSWORD),
        designation="System Administrator",
        department="IT",
        status=UserStatus.ACTIVE,
        company_id=demo.id,
        role=RoleType.COMPANY_ADMIN,
    )
    platform = repositories.companies.create(
        company_name="Platform Admin",
        primary_admin_email="super@platform.com",
        created_on=now,
        plan_type=PlanType.PRO,
        notes="Super Admin",
        subscription_start_date=now,
        subscription_end_date=next_month,
        is_subscription_active=True,
        renewal_status=RenewalStatus.ACTIVE,
    )
    repositories.users.create(
        full_name="Super Admin",
        email="super@platform.com",
        password_hash=hash_password(DEMO_PASSWORD),
        designation="Platform Administrator",
        department="Operations",
        status=UserStatus.ACTIVE,
        company_id=platform.id,
        role=RoleType.SUPER_ADMIN,
    )
    repositories.departments.create(company_id=demo.id, name="IT", is_active=True)
    general = repositories.spaces.create(
        space_name="General", description="Main", company_id=demo.id, created_by=admin.id
    )
    repositories.space_members.create(
        space_id=general.id, user_id=admin.id, role_in_space=SpaceRole.SPACE_MANAGER, is_active=True
    )
    logger.info("Seeded demo companies %s and %s", demo.id, platform.id)
    return {"seeded": True, "companies": [demo.id, platform.id]}


def list_companies(intranet: Intranet) -> list[dict[str, Any]]:
    rows = []
    for company in intranet.repositories.companies.all():
        rows.append(
            {
                "id": company.id,
                "companyName": company.company_name,
                "planType": str(company.plan_type),
                "effectivePlan": str(intranet.plan_gate.effective_plan(company)),
                "renewalStatus": str(intranet.plan_gate.renewal_status(company)),
                "activeUsers": intranet.repositories.users.count_active(company.id),
                "spaces": intranet.repositories.spaces.count(company.id),
                "isActive": company.is_active,
            }
        )
    return rows


def list_spaces(intranet: Intranet, company_id: str) -> list[dict[str, Any]]:
    rows = []
    for space in intranet.repositories.spaces.list(company_id):
        members = intranet.repositories.space_members.for_space(space.id)
        rows.append(
            {
                "id": space.id,
                "spaceName": space.space_name,
                "activeMembers": sum(1 for member in members if member.is_active),
                "managers": sum(
                    1 for member in members if member.is_active and member.role_in_space == SpaceRole.SPACE_MANAGER
                ),
            }
        )
    return rows


def audit_access(intranet: Intranet, email: str) -> dict[str, Any] | None:
    """Describe what a user can open: spaces with effective roles and plan features."""
    user = intranet.repositories.users.get_by_email(email)
    if user is None:
        return None
    principal = user.to_principal()
    company = intranet.repositories.companies.get(user.company_id)
    roles = intranet.access.space_roles(user.company_id, principal)
    spaces = {space.id: space.space_name for space in intranet.repositories.spaces.list(user.company_id)}
    return {
        "userId": user.id,
        "role": str(user.role),
        "status": str(user.status),
        "companyId": user.company_id,
        "spaces": [
            {"id": space_id, "spaceName": spaces.get(space_id, "Unknown"), "effectiveRole": str(role)}
            for space_id, role in roles.items()
        ],
        "features": {
            feature: intranet.plan_gate.can_access_feature(company, feature)
            for feature in intranet.plan_settings.basic_restricted_features
        },
    }


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Intranet operational helper.")
    parser.add_argument("--store-dir", default=None, help="Directory of the JSON-file store.")
    parser.add_argument("--key-prefix", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seed-demo")
    sub.add_parser("list-companies")

    spaces = sub.add_parser("list-spaces")
    spaces.add_argument("--company-id", required=True)

    audit = sub.add_parser("audit-access")
    audit.add_argument("--email", required=True)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(LoggingSettings())
    intranet = open_intranet(args.store_dir, args.key_prefix)

    if args.command == "seed-demo":
        print(json.dumps(seed_demo(intranet), indent=2))
        return 0

    if args.command == "list-companies":
        print(json.dumps({"companies": list_companies(intranet)}, indent=2))
        return 0

    if args.command == "list-spaces":
        if intranet.repositories.companies.get(args.company_id) is None:
            print(json.dumps({"error": f"company '{args.company_id}' not found"}, indent=2))
            return 1
        print(json.dumps({"spaces": list_spaces(intranet, args.company_id)}, indent=2))
        return 0

    if args.command == "audit-access":
        report = audit_access(intranet, args.email)
        if report is None:
            print(json.dumps({"error": f"user '{args.email}' not found"}, indent=2))
            return 1
        print(json.dumps(report, indent=2))
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())

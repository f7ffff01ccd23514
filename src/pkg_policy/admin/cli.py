# src/pkg_policy/admin/cli.py

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Sequence

from .config_file import settings_from_yaml
from .env import settings_from_env
from .settings import PolicyAdminSettings
from ..domain.exceptions import PasswordPolicyError
from ..integrations.common.policy_factory import create_password_policy_service


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-policy",
        description="Read or reconcile a Keycloak realm password policy",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="YAML config file (default: read KEYCLOAK_* environment variables).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("get", help="Print the realm's current password policy.")

    apply_p = sub.add_parser("apply", help="Overwrite the realm's password policy.")
    apply_p.add_argument(
        "--policy",
        "-p",
        help="Policy string to apply (default: the configured desired-policy-string).",
    )

    serve_p = sub.add_parser("serve", help="Run the password policy HTTP API.")
    serve_p.add_argument("--host", default="0.0.0.0")
    serve_p.add_argument("--port", type=int, default=8080)

    return parser.parse_args(args=argv)


def _load_settings(args: argparse.Namespace) -> PolicyAdminSettings:
    if args.config:
        return settings_from_yaml(args.config)
    return settings_from_env()


async def _run(args: argparse.Namespace, settings: PolicyAdminSettings) -> dict[str, Any]:
    service = create_password_policy_service(settings)
    try:
        if args.command == "get":
            policy = await service.get_current_policy()
            return {"realm": service.realm, "policy": policy}

        if args.policy is not None:
            applied = await service.reconciler.apply_desired_policy(args.policy)
        else:
            applied = await service.apply_configured_policy()
        return {"realm": service.realm, "applied": applied}
    finally:
        await service.aclose()


def _serve(args: argparse.Namespace, settings: PolicyAdminSettings) -> None:
    import uvicorn

    from ..integrations.fastapi import create_password_policy_app

    uvicorn.run(
        create_password_policy_app(settings),
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )


def _error_summary(exc: Exception) -> dict[str, Any]:
    summary: dict[str, Any] = {"ok": False, "error": str(exc), "kind": type(exc).__name__}
    if isinstance(exc, PasswordPolicyError):
        summary["status_code"] = exc.status_code
        summary["retryable"] = exc.retryable
    return summary


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        settings = _load_settings(args)
        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper(), logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )
        if args.command == "serve":
            _serve(args, settings)
            return 0
        summary = asyncio.run(_run(args, settings))
    except (PasswordPolicyError, FileNotFoundError) as exc:
        json.dump(_error_summary(exc), sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 1

    json.dump({"ok": True, **summary}, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

import datetime
import json
import logging
import sys
from pathlib import Path

from stargaze.config import load_config
from stargaze.errors import ConfigurationError
from stargaze.planner import Planner
from stargaze.planner.formatters import format_json, format_text
from stargaze.planner.types import OutputMode

logger = logging.getLogger(__name__)


def _json_envelope(command: str, ok: bool, data=None, error=None) -> dict:
    return {
        "ok": ok,
        "command": command,
        "timestamp_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "data": data,
        "error": error,
    }


def _init_logging(level: str | None) -> None:
    if not level:
        return
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level, logging.INFO))


def _config_path_from_args(args) -> Path | None:
    if args is None:
        return None
    path = getattr(args, "config", None)
    return Path(path) if path else None


def _parse_date_arg(value: str | None) -> str | None:
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(value).isoformat()
    except ValueError:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value}") from None


def _print_error(args, command: str, code: str, message: str) -> None:
    if getattr(args, "json", False):
        payload = _json_envelope(
            command=command,
            ok=False,
            data=None,
            error={"code": code, "message": message, "details": None},
        )
        print(json.dumps(payload, indent=2))
    else:
        print(message, file=sys.stderr)


def run_plan(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    try:
        config = load_config(_config_path_from_args(args)).with_overrides(
            telescope_level=getattr(args, "level", None),
            start_hour=getattr(args, "start_hour", None),
            end_hour=getattr(args, "end_hour", None),
            output_mode=OutputMode.VERBOSE.value if getattr(args, "verbose", False) else None,
        )
        date = _parse_date_arg(getattr(args, "date", None))
        planner = Planner(config)
    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        _print_error(args, "plan", "invalid_config", f"Error: {e}")
        return 2

    try:
        report = planner.plan(date=date)
    except Exception as e:
        logger.exception("plan failed")
        _print_error(args, "plan", "fatal", f"Fatal error: {e}")
        return 1

    if getattr(args, "json", False):
        payload = _json_envelope(
            command="plan",
            ok=True,
            data=json.loads(format_json(report)),
            error=None,
        )
        print(json.dumps(payload, indent=2))
    else:
        print(format_text(report))
    return 0


def run_doctor(args=None) -> int:
    _init_logging(getattr(args, "log_level", None))

    def check_config_file():
        try:
            load_config(_config_path_from_args(args))
            return {"ok": True, "detail": "loaded (defaults applied if missing)"}
        except Exception as e:
            return {"ok": False, "detail": f"invalid config: {e}"}

    def check_settings():
        try:
            load_config(_config_path_from_args(args)).validate()
            return {"ok": True, "detail": "credentials, site and window are valid"}
        except Exception as e:
            return {"ok": False, "detail": str(e)}

    checks = {
        "config": check_config_file(),
        "settings": check_settings(),
    }
    ok = all(c["ok"] for c in checks.values())

    if args is not None and getattr(args, "json", False):
        payload = _json_envelope(
            command="doctor",
            ok=ok,
            data={"checks": checks},
            error=None
            if ok
            else {
                "code": "doctor_failed",
                "message": "one or more checks failed",
                "details": None,
            },
        )
        print(json.dumps(payload, indent=2))
    else:
        print("Stargaze Doctor Report")
        print("======================")

        for name, result in checks.items():
            status = "OK" if result["ok"] else "MISSING"
            print(f"{name:20} : {status} ({result['detail']})")

        if ok:
            print("\nReady to plan.")
        else:
            print("\nSome settings are missing or invalid.")

    return 0 if ok else 1

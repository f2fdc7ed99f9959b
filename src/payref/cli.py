from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from payref.reference import ValidationOutcome, ValidationSettings, settings_from_config, validate
from payref.utils.config import DEFAULT_CONFIG_NAME, deep_get, load_config
from payref.utils.log_context import log_scope, new_batch_id
from payref.utils.logging_setup import log_event, setup_logging
from payref.utils.paths import resolve_log_dir


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="payref", description="Validate Belgian and Dutch payment references.")
    ap.add_argument("--config", default=DEFAULT_CONFIG_NAME)
    ap.add_argument("--json", action="store_true", help="print one JSON object per reference")
    ap.add_argument("--lenient", action="store_true", help="accept references of unusual length")
    sub = ap.add_subparsers(dest="command", required=True)

    ap_validate = sub.add_parser("validate")
    ap_validate.add_argument("references", nargs="+")

    ap_file = sub.add_parser("check-file")
    ap_file.add_argument("path", help="text file with one reference per line, '-' for stdin")
    return ap


def _read_lines(path: str) -> List[Tuple[int, str]]:
    if path == "-":
        lines = sys.stdin.read().splitlines()
    else:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    # line terminators are dropped by splitlines(); the rest goes to validate() untouched
    return [(i, line) for i, line in enumerate(lines, start=1) if line.strip()]


def _format(ref: str, outcome: ValidationOutcome, as_json: bool) -> str:
    if as_json:
        return json.dumps({"reference": ref, **outcome.as_dict()}, ensure_ascii=False)
    scheme = outcome.scheme.value if outcome.scheme else "?"
    if outcome.valid:
        return f"OK {scheme} {ref}"
    return f"FAIL {scheme} {ref}: {outcome.error_message}"


def _run_batch(
    items: Iterable[Tuple[Optional[int], str]],
    settings: ValidationSettings,
    source: str,
    as_json: bool,
    log,
) -> int:
    total = failed = 0
    with log_scope(batch_id=new_batch_id(), source=source):
        for line_no, ref in items:
            with log_scope(line_no=line_no):
                outcome = validate(ref, settings)
                if not outcome.valid:
                    failed += 1
                    log.info("reference rejected: %s (%s)", ref, outcome.error_kind.value if outcome.error_kind else "")
            total += 1
            print(_format(ref, outcome, as_json))
        log_event(log, "batch.finish", "Batch validated", source=source, total=total, failed=failed)
    return 0 if failed == 0 else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    cfg = load_config(Path(args.config))
    settings = settings_from_config(cfg)
    if args.lenient:
        settings = dataclasses.replace(settings, strict_length=False)

    log = setup_logging(resolve_log_dir(deep_get(cfg, ["app", "log_dir"])), name="payref.cli")
    log_event(log, "cli.start", "CLI started", command=args.command, strict_length=settings.strict_length)

    if args.command == "validate":
        items = [(None, r) for r in args.references]
        return _run_batch(items, settings, "argv", args.json, log)

    try:
        items = _read_lines(args.path)
    except OSError as e:
        log.error("Cannot read %s: %s", args.path, e)
        print(f"payref: cannot read {args.path}: {e}", file=sys.stderr)
        return 2
    return _run_batch(items, settings, args.path, args.json, log)

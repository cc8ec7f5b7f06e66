from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Union

from .common import ensure_contact_record, load_config, settings_from_config
from .config_loader import ExportConfig
from .ldif import LdifSettings
from .logging_utils import configure_logging
from .sources import load_contacts
from .transform import record_to_ldif

logger = logging.getLogger(__name__)


@dataclass
class ExportStats:
    total: int = 0
    written: int = 0
    skipped: int = 0


def iter_ldif_entries(
    records: Iterable[Any],
    settings: Optional[LdifSettings] = None,
    skip_malformed: bool = False,
    stats: Optional[ExportStats] = None,
) -> Iterator[str]:
    """
    Yield one rendered entry per accepted contact, in input order.

    Contacts without a name or email are skipped. A malformed contact aborts
    the run unless ``skip_malformed`` is set, in which case it is logged and
    counted as skipped.
    """
    stats = stats if stats is not None else ExportStats()
    for index, raw in enumerate(records):
        stats.total += 1
        try:
            entry = record_to_ldif(ensure_contact_record(raw), settings)
        except (TypeError, ValueError):
            if not skip_malformed:
                raise
            logger.exception("Skipping malformed contact at position %d", index)
            stats.skipped += 1
            continue
        if entry is None:
            stats.skipped += 1
            continue
        stats.written += 1
        yield entry


def records_to_ldif(
    records: Iterable[Any],
    settings: Optional[LdifSettings] = None,
    skip_malformed: bool = False,
) -> str:
    return "".join(iter_ldif_entries(records, settings, skip_malformed=skip_malformed))


def write_ldif(
    records: Iterable[Any],
    path: Union[str, Path],
    settings: Optional[LdifSettings] = None,
    skip_malformed: bool = False,
) -> ExportStats:
    stats = ExportStats()
    entries: List[str] = list(
        iter_ldif_entries(records, settings, skip_malformed=skip_malformed, stats=stats)
    )
    with open(path, "w", encoding="utf-8", newline="\n") as handle:
        handle.writelines(entries)
    return stats


def build(args: argparse.Namespace, config: Optional[ExportConfig] = None) -> ExportStats:
    config = config or load_config(args)
    records = load_contacts(config.inputs.contacts)
    out_path = config.outputs.ldif
    out_path.parent.mkdir(parents=True, exist_ok=True)

    stats = write_ldif(
        records,
        out_path,
        settings=settings_from_config(config),
        skip_malformed=config.ldif.skip_malformed,
    )
    logger.info(
        "Wrote %d of %d contacts (%d skipped)", stats.written, stats.total, stats.skipped
    )
    logger.info("Saved: %s", out_path)
    return stats


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Export contacts as LDIF for import into a Mozilla address book."
    )
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config.")
    parser.add_argument(
        "--contacts", type=str, default=None, help="Contacts file (.csv, .yaml, .yml or .json)."
    )
    parser.add_argument("--out", type=str, default=None, help="Output .ldif path.")
    parser.add_argument(
        "--no-base64",
        action="store_true",
        help="Escape multi-line values instead of base64 encoding them (debugging aid).",
    )
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        default=None,
        help="Log and skip malformed contacts instead of aborting.",
    )
    parser.add_argument("--log-level", type=str, default=None, help="Override logging level")
    args = parser.parse_args()

    config = load_config(args)
    configure_logging(config, level_override=args.log_level)
    build(args, config=config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

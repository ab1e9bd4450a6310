"""Find and optionally remove framework references to deleted concepts.

Usage:
  python -m conceptcraft.maintenance            # dry-run, lists dangling references
  python -m conceptcraft.maintenance --apply    # rewrite the affected frameworks

Deleting a concept leaves its uid in every framework that listed it; the
public API already skips such references, this sweep removes them.
"""
from __future__ import annotations
import argparse
import logging
from typing import Dict, List, Optional, Sequence

from conceptcraft import container
from conceptcraft.persistence.db import init_db

logger = logging.getLogger(__name__)


def show_preview(removed: Dict[str, List[str]], applied: bool) -> None:
    if not removed:
        print("No dangling concept references found.")
        return
    print("Removed references:" if applied else "Dangling references (dry-run):")
    for framework_id, uids in removed.items():
        print(f" - {framework_id}: {', '.join(uids)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--apply", action="store_true", help="rewrite frameworks instead of only listing")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    init_db()
    removed = container.get_framework_app_service().prune_dangling_refs(apply=args.apply)
    show_preview(removed, args.apply)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

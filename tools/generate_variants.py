"""Generate size/stroke variant sets for icons in a JSON scene document.

Usage:
  python tools/generate_variants.py data/examples/icons_document.json -o out/icons_variants.json
  python tools/generate_variants.py doc.json --sizes 16 24 32 --strokes 1 1.5 2 --name Arrow
  python tools/generate_variants.py doc.json --preset compact --select 2:1 2:4

Env vars:
- ICON_VARIANTS_DIAG_JSONL: append diagnostics events to this JSONL file
- DEBUG*=1: per-component diagnostics events
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.builders.variants.context import make_build_context  # noqa: E402
from src.builders.variants.errors import MalformedRequestError  # noqa: E402
from src.builders.variants.presets.catalog import preset_ids, resolve_plan  # noqa: E402
from src.pipeline.document import load_document, save_document  # noqa: E402
from src.pipeline.plugin import VariantPlugin  # noqa: E402

DEFAULT_OUTPUT = Path("out/variants/document.json")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate icon variant sets from a scene document.")
    parser.add_argument("document", help="Path to the scene document JSON.")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT), help="Output document path.")
    parser.add_argument("--sizes", type=float, nargs="+", help="Target sizes.")
    parser.add_argument("--strokes", type=float, nargs="+", help="Stroke widths, one per size.")
    parser.add_argument("--name", default=None, help="Override name for the generated sets.")
    parser.add_argument("--preset", default=None, help=f"Plan preset: {', '.join(preset_ids())}.")
    parser.add_argument("--select", nargs="+", default=None, help="Node ids to select instead of the saved selection.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    host = load_document(args.document)
    if args.select:
        host.set_selection([host.get(node_id) for node_id in args.select])

    try:
        plan = resolve_plan(
            args.preset,
            sizes=args.sizes,
            strokes=args.strokes,
            custom_name=args.name,
            ctx=make_build_context(),
        )
    except MalformedRequestError as exc:
        print(f"Invalid plan: {exc}", file=sys.stderr)
        return 2

    plugin = VariantPlugin(host)
    result = plugin.on_message(
        {
            "type": "generate",
            "sizes": list(plan.sizes),
            "strokes": list(plan.strokes),
            "customName": plan.custom_name,
        }
    )
    for notification in host.notifications:
        print(notification.message, file=sys.stderr if notification.error else sys.stdout)
    if result is None:
        return 1
    for failure in result.failures:
        print(f"  failed: {failure.source_name}: {failure.message}", file=sys.stderr)

    print(save_document(host, args.output))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())

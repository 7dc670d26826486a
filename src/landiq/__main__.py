import argparse
import json
import logging
import random
import sys

from .map_layer import build_overlay_collection
from .placement import MarkerPoint, PlacementInputError, place_circles
from .properties.predict import predict_permit
from .properties.seed import seed_properties
from .properties.storage import PropertyStore
from .settings import get_settings


logger = logging.getLogger("landiq.cli")


def _load_markers(path):
    if path == "-":
        raw = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get("markers", [])
    if not isinstance(raw, list):
        raise PlacementInputError("marker input must be a JSON list or {\"markers\": [...]}")
    return [MarkerPoint.from_dict(item) for item in raw]


def _emit(payload):
    print(json.dumps(payload, indent=2, default=str))


def cmd_predict(args, settings):
    rng = random.Random(args.seed) if args.seed is not None else None
    prediction = predict_permit(args.address, rng=rng)
    if not args.save:
        _emit(prediction.model_dump())
        return 0
    with PropertyStore(args.db or settings.db_path) as store:
        _emit(store.save(prediction).model_dump())
    return 0


def cmd_list(args, settings):
    with PropertyStore(args.db or settings.db_path) as store:
        _emit([p.model_dump() for p in store.list_recent(limit=args.limit)])
    return 0


def cmd_delete(args, settings):
    with PropertyStore(args.db or settings.db_path) as store:
        if not store.delete(args.property_id):
            print(f"property not found: {args.property_id}", file=sys.stderr)
            return 1
    return 0


def cmd_seed(args, settings):
    rng = random.Random(args.seed) if args.seed is not None else None
    with PropertyStore(args.db or settings.db_path) as store:
        added = seed_properties(store, rng)
    print(f"Added {len(added)} sample properties")
    return 0


def cmd_place(args, settings):
    config = settings.placement_config(
        min_clearance_m=args.clearance,
        ring_angles=args.angles,
        max_rings=args.rings,
        ring_spacing=args.spacing,
    )
    placed = place_circles(_load_markers(args.input), config)
    degraded = [c.marker_id for c in placed if c.degraded]
    if degraded:
        logger.warning("%s circle(s) kept an overlapping position: %s", len(degraded), degraded)
    _emit([c.to_dict() for c in placed])
    return 0


def cmd_overlays(args, settings):
    radius = settings.circle_radius_m if args.radius_m is None else args.radius_m
    config = settings.placement_config(min_clearance_m=args.clearance)
    with PropertyStore(args.db or settings.db_path) as store:
        properties = store.list_recent(limit=args.limit)
    _emit(build_overlay_collection(properties, radius_m=radius, config=config))
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="landiq",
        description="LandIQ permit predictions and map overlays",
    )
    parser.add_argument(
        "--db",
        default=None,
        help="SQLite path for saved properties (default: $LANDIQ_DB or ./landiq.sqlite)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, etc.)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("predict", help="Predict permit processing time for an address")
    p.add_argument("address")
    p.add_argument("--save", action="store_true", help="Save the prediction")
    p.add_argument("--seed", type=int, default=None, help="Seed for the mock geocoder")
    p.set_defaults(func=cmd_predict)

    p = sub.add_parser("list", help="List saved properties, newest first")
    p.add_argument("--limit", type=int, default=None)
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("delete", help="Delete a saved property")
    p.add_argument("property_id")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("seed", help="Add the sample Bay Area properties")
    p.add_argument("--seed", type=int, default=None, help="Seed for the mock geocoder")
    p.set_defaults(func=cmd_seed)

    p = sub.add_parser("place", help="Place non-overlapping circles for JSON markers")
    p.add_argument("--input", default="-", help="JSON file with markers ('-' for stdin)")
    p.add_argument("--clearance", type=float, default=None, help="Minimum gap in meters")
    p.add_argument("--rings", type=int, default=None, help="Maximum ring count")
    p.add_argument("--angles", type=int, default=None, help="Candidates per ring")
    p.add_argument("--spacing", type=float, default=None, help="Ring spacing multiplier")
    p.set_defaults(func=cmd_place)

    p = sub.add_parser("overlays", help="GeoJSON markers and circles for saved properties")
    p.add_argument("--radius-m", type=float, default=None)
    p.add_argument("--clearance", type=float, default=None)
    p.add_argument("--limit", type=int, default=None)
    p.set_defaults(func=cmd_overlays)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args, get_settings())
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
tzcat — query the time zone catalogue from the command line.

Usage:
  tzcat regions
  tzcat zones --region Europe
  tzcat nearest 48.0 2.0
  tzcat locate 40.7580 -73.9855
  tzcat lookup America Argentina/Salta
  tzcat status

Add --json to any subcommand for machine-readable output, -v for debug logs.
"""

import json
import logging
import os
import sys

from catalogue import Catalogue, CatalogueError, ZoneRecord, parse_coordinates
from dataset import dataset_source, default_catalogue
from resolver import TimezoneResolver
from views import RegionFilterView, RegionIndex

log = logging.getLogger("tzcat")

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_REGION = os.environ.get("TZCAT_DEFAULT_REGION", "")

_catalogue: Catalogue | None = None


def get_catalogue() -> Catalogue:
    """Process-wide catalogue, built on first use."""
    global _catalogue
    if _catalogue is None:
        _catalogue = default_catalogue()
    return _catalogue


def record_to_dict(record: ZoneRecord) -> dict:
    return {
        "tz": record.tz_name,
        "region": record.region,
        "zone": record.zone,
        "name": record.display_text(),
        "country": record.country,
        "latitude": record.latitude,
        "longitude": record.longitude,
    }


# ---------------------------------------------------------------------------
# Arg sniffing
# ---------------------------------------------------------------------------

def _has_flag(argv: list, flag: str) -> bool:
    return flag in argv


def _get_flag_value(argv: list, flag: str) -> str | None:
    try:
        idx = argv.index(flag)
        if idx + 1 < len(argv):
            return argv[idx + 1]
    except ValueError:
        pass
    return None


def _remove_flag(argv: list, flag: str, has_value: bool = True) -> list:
    """Remove a flag (and its value) from argv."""
    result = []
    i = 0
    while i < len(argv):
        if argv[i] == flag:
            if has_value and i + 1 < len(argv):
                i += 2  # skip flag + value
            else:
                i += 1  # skip flag only
        else:
            result.append(argv[i])
            i += 1
    return result


def _coordinates(args: list) -> tuple[float, float] | None:
    """Parse LAT LON positionals. Negative values are fine ('-74.0')."""
    if len(args) != 2:
        return None
    try:
        return parse_coordinates(args[0], args[1])
    except ValueError as e:
        log.debug("bad coordinates: %s", e)
        return None


def _emit(data, as_json: bool, text: str):
    if as_json:
        print(json.dumps(data, indent=2))
    else:
        print(text)


# ---------------------------------------------------------------------------
# Main dispatch
# ---------------------------------------------------------------------------

def main(argv: list | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    logging.basicConfig(
        level=logging.DEBUG if "-v" in argv or "--verbose" in argv else logging.INFO,
        format="%(asctime)s tzcat %(levelname)s %(message)s",
    )

    argv = _remove_flag(argv, "-v", has_value=False)
    argv = _remove_flag(argv, "--verbose", has_value=False)
    as_json = _has_flag(argv, "--json")
    argv = _remove_flag(argv, "--json", has_value=False)

    if not argv or argv[0] in ("help", "-h", "--help"):
        _print_help()
        return 0

    subcmd = argv[0]
    sub_argv = argv[1:]

    try:
        catalogue = get_catalogue()
    except CatalogueError as e:
        print(f"tzcat: bad zone dataset: {e}", file=sys.stderr)
        return 3

    if subcmd == "regions":
        return _cmd_regions(catalogue, as_json)
    elif subcmd == "zones":
        return _cmd_zones(catalogue, sub_argv, as_json)
    elif subcmd in ("nearest", "locate"):
        return _cmd_resolve(catalogue, subcmd, sub_argv, as_json)
    elif subcmd == "lookup":
        return _cmd_lookup(catalogue, sub_argv, as_json)
    elif subcmd == "status":
        return _cmd_status(catalogue, as_json)

    print(f"tzcat: unknown command {subcmd!r}", file=sys.stderr)
    _print_help()
    return 2


def _print_help():
    print("""tzcat — time zone catalogue

Commands:
  regions                      List regions in catalogue order
  zones --region <region>      List the zones of one region
  nearest <lat> <lon>          Zone with the closest anchor point
  locate <lat> <lon>           Zone whose boundary contains the point (else nearest)
  lookup <region> <zone>       Exact lookup; exit status 1 if not found
  status                       Catalogue summary

Options:
  --json                       JSON output
  -v, --verbose                Debug logging""")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_regions(catalogue: Catalogue, as_json: bool) -> int:
    index = RegionIndex(catalogue)
    _emit(index.rows(), as_json, "\n".join(index))
    return 0


def _cmd_zones(catalogue: Catalogue, argv: list, as_json: bool) -> int:
    region = _get_flag_value(argv, "--region") or (argv[0] if argv else DEFAULT_REGION)
    view = RegionFilterView(catalogue, region)
    rows = view.rows()
    _emit(rows, as_json, "\n".join(f"  {r['name']:30s} {r['key']}" for r in rows))
    if not rows:
        log.info("No zones in region %r", region)
    return 0


def _cmd_resolve(catalogue: Catalogue, subcmd: str, argv: list, as_json: bool) -> int:
    coords = _coordinates(argv)
    if coords is None:
        print(f"tzcat {subcmd}: expected <lat> <lon> in degrees, got {' '.join(argv)!r}",
              file=sys.stderr)
        return 2
    resolver = TimezoneResolver(catalogue)
    if subcmd == "locate":
        record = resolver.locate(*coords)
    else:
        record = resolver.resolve(*coords)
    _emit(record_to_dict(record), as_json, record.tz_name)
    return 0


def _cmd_lookup(catalogue: Catalogue, argv: list, as_json: bool) -> int:
    if len(argv) == 1:
        region, _, zone = argv[0].partition("/")
    elif len(argv) == 2:
        region, zone = argv
    else:
        print("tzcat lookup: expected <region> <zone> or <region/zone>", file=sys.stderr)
        return 2
    record = TimezoneResolver(catalogue).lookup_by_name(region, zone)
    if record is None:
        print(f"tzcat lookup: no zone {region}/{zone}", file=sys.stderr)
        return 1
    _emit(record_to_dict(record), as_json, record.tz_name)
    return 0


def _cmd_status(catalogue: Catalogue, as_json: bool) -> int:
    resolver = TimezoneResolver(catalogue)
    data = {
        "source": dataset_source(),
        "zones": len(catalogue),
        "regions": len(RegionIndex(catalogue)),
        "fallback": resolver.fallback.tz_name,
    }
    _emit(data, as_json,
          f"📚 Dataset: {data['source']}\n"
          f"🕐 Zones: {data['zones']} in {data['regions']} regions\n"
          f"🗽 Fallback: {data['fallback']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

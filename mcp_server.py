#!/usr/bin/env python3
"""
tzcat MCP server — the time zone catalogue as MCP tools.

Exposes tools: regions, zones, nearest, locate, lookup, select, status.
`select` publishes the chosen zone into the process-wide GlobalStorage so
later stages can read locationRegion / locationZone.

Protocol: MCP (Model Context Protocol) over stdio (JSON-RPC 2.0)
"""

import json
import logging
import sys

from catalogue import parse_coordinates
from dataset import dataset_source
from resolver import TimezoneResolver
from store import REGION_KEY, ZONE_KEY, GlobalStorage, publish_selection
from tzcat import DEFAULT_REGION, get_catalogue, record_to_dict
from views import RegionFilterView, RegionIndex

log = logging.getLogger("tzcat.mcp")

# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

STORAGE = GlobalStorage()

_view: RegionFilterView | None = None


def get_view() -> RegionFilterView:
    global _view
    if _view is None:
        _view = RegionFilterView(get_catalogue(), DEFAULT_REGION)
        _view.subscribe(lambda region: log.info("Region changed: %s", region))
    return _view


def _coords(params):
    missing = [k for k in ("lat", "lon") if params.get(k) is None]
    if missing:
        raise ValueError(f"missing parameter {missing[0]!r}")
    return parse_coordinates(params["lat"], params["lon"])


# ---------------------------------------------------------------------------
# Tool implementations
# ---------------------------------------------------------------------------

TOOLS = {}

COORD_SCHEMA = {
    "type": "object",
    "properties": {
        "lat": {"type": "number", "description": "Latitude in degrees"},
        "lon": {"type": "number", "description": "Longitude in degrees"},
    },
    "required": ["lat", "lon"],
}


def tool(name, description, schema):
    """Decorator to register a tool."""
    def decorator(fn):
        TOOLS[name] = {"fn": fn, "description": description, "schema": schema}
        return fn
    return decorator


@tool("regions", "List time zone regions in catalogue order", {
    "type": "object", "properties": {},
})
def tool_regions(params):
    return {"regions": RegionIndex(get_catalogue()).rows()}


@tool("zones", "List the zones of a region (defaults to the last region asked for)", {
    "type": "object",
    "properties": {
        "region": {"type": "string", "description": "Region, e.g. Europe"},
    },
})
def tool_zones(params):
    view = get_view()
    if params.get("region") is not None:
        view.set_region(params["region"])
    return {"region": view.region, "zones": view.rows()}


@tool("nearest", "Zone with the closest anchor point to a coordinate", COORD_SCHEMA)
def tool_nearest(params):
    return record_to_dict(TimezoneResolver(get_catalogue()).resolve(*_coords(params)))


@tool("locate", "Zone whose boundary contains a coordinate, else the nearest", COORD_SCHEMA)
def tool_locate(params):
    return record_to_dict(TimezoneResolver(get_catalogue()).locate(*_coords(params)))


@tool("lookup", "Look up a zone by region and zone name", {
    "type": "object",
    "properties": {
        "region": {"type": "string"},
        "zone": {"type": "string", "description": "Zone key, e.g. Argentina/Salta"},
    },
    "required": ["region", "zone"],
})
def tool_lookup(params):
    record = TimezoneResolver(get_catalogue()).lookup_by_name(params["region"], params["zone"])
    if record is None:
        return {"found": False, "region": params["region"], "zone": params["zone"]}
    return {"found": True, **record_to_dict(record)}


@tool("select", "Choose a zone by name, or by coordinate (nearest), and publish it", {
    "type": "object",
    "properties": {
        "region": {"type": "string"},
        "zone": {"type": "string"},
        "lat": {"type": "number"},
        "lon": {"type": "number"},
    },
})
def tool_select(params):
    resolver = TimezoneResolver(get_catalogue())
    region, zone = params.get("region"), params.get("zone")
    if region or zone:
        if not (region and zone):
            raise ValueError("select by name needs both region and zone")
        record = resolver.lookup_by_name(region, zone)
        if record is None:
            raise ValueError(f"no zone {region}/{zone}")
    else:
        record = resolver.resolve(*_coords(params))
    publish_selection(STORAGE, record)
    get_view().set_region(record.region)
    return {"selected": record_to_dict(record)}


@tool("status", "Show catalogue summary and the current selection", {
    "type": "object", "properties": {},
})
def tool_status(params):
    catalogue = get_catalogue()
    return {
        "source": dataset_source(),
        "zones": len(catalogue),
        "regions": len(RegionIndex(catalogue)),
        "fallback": TimezoneResolver(catalogue).fallback.tz_name,
        "selection": {
            "region": STORAGE.value(REGION_KEY),
            "zone": STORAGE.value(ZONE_KEY),
        },
    }


# ---------------------------------------------------------------------------
# MCP protocol handler (JSON-RPC 2.0 over stdio)
# ---------------------------------------------------------------------------

METHOD_NOT_FOUND = -32601


def _reply(msg_id, result):
    return {"jsonrpc": "2.0", "id": msg_id, "result": result}


def _error(msg_id, message, code=METHOD_NOT_FOUND):
    return {"jsonrpc": "2.0", "id": msg_id, "error": {"code": code, "message": message}}


def _text(text, is_error=False):
    result = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


def _call_tool(name, arguments):
    """Run a tool; failures are reported to the client as error content."""
    try:
        return _text(json.dumps(TOOLS[name]["fn"](arguments), indent=2))
    except Exception as e:
        log.warning("tool %s failed: %s", name, e)
        return _text(f"Error: {e}", is_error=True)


def handle_request(msg):
    method = msg.get("method", "")
    params = msg.get("params", {})
    msg_id = msg.get("id")

    if method == "initialize":
        return _reply(msg_id, {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "tzcat", "version": "0.1.0"},
        })
    if method == "notifications/initialized":
        return None
    if method == "ping":
        return _reply(msg_id, {})
    if method == "tools/list":
        return _reply(msg_id, {"tools": [
            {"name": name, "description": t["description"], "inputSchema": t["schema"]}
            for name, t in TOOLS.items()
        ]})
    if method == "tools/call":
        name = params.get("name", "")
        if name not in TOOLS:
            return _error(msg_id, f"Unknown tool: {name}")
        return _reply(msg_id, _call_tool(name, params.get("arguments", {})))

    # Notifications get no response, even unknown ones
    if msg_id is None:
        return None
    return _error(msg_id, f"Unknown method: {method}")


def main():
    """MCP server: read JSON-RPC from stdin, write to stdout."""
    logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                        format="%(asctime)s tzcat %(levelname)s %(message)s")
    log.info("tzcat MCP server starting (%d zones)", len(get_catalogue()))

    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        try:
            msg = json.loads(line)
        except json.JSONDecodeError:
            log.warning("Ignoring non-JSON line")
            continue

        response = handle_request(msg)
        if response is not None:
            sys.stdout.write(json.dumps(response) + "\n")
            sys.stdout.flush()


if __name__ == "__main__":
    main()

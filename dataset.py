"""
Zone dataset: the embedded table, plus a JSON loader for replacement tables.

The embedded table follows zone.tab: one row per named zone, ordered by
country code, with the zone's principal city as its anchor point.

JSON datasets (TZCAT_DATASET_FILE) are a list of objects:
  {"region": "Europe", "zone": "Paris", "country": "FR", "latitude": 48.86, "longitude": 2.33}
or, with the identifier in one field:
  {"tz": "Europe/Paris", "country": "FR", "latitude": 48.86, "longitude": 2.33}
"""

import json
import logging
import os
from pathlib import Path

from catalogue import Catalogue, CatalogueError, ZoneRecord

log = logging.getLogger("tzcat.dataset")

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DATASET_FILE = os.environ.get("TZCAT_DATASET_FILE", "")

# ---------------------------------------------------------------------------
# Embedded table: (region, zone, country, latitude, longitude)
# ---------------------------------------------------------------------------

ZONES: tuple[tuple[str, str, str, float, float], ...] = (
    ("Europe", "Andorra", "AD", 42.50, 1.52),
    ("Asia", "Dubai", "AE", 25.30, 55.30),
    ("Asia", "Kabul", "AF", 34.52, 69.20),
    ("Europe", "Tirane", "AL", 41.33, 19.83),
    ("Asia", "Yerevan", "AM", 40.18, 44.50),
    ("Antarctica", "Casey", "AQ", -66.28, 110.52),
    ("Antarctica", "Davis", "AQ", -68.58, 77.97),
    ("Antarctica", "Mawson", "AQ", -67.60, 62.88),
    ("Antarctica", "Palmer", "AQ", -64.80, -64.10),
    ("Antarctica", "Rothera", "AQ", -67.57, -68.13),
    ("Antarctica", "Troll", "AQ", -72.01, 2.53),
    ("Antarctica", "Vostok", "AQ", -78.40, 106.90),
    ("Antarctica", "McMurdo", "AQ", -77.83, 166.60),
    ("America", "Argentina/Buenos_Aires", "AR", -34.60, -58.45),
    ("America", "Argentina/Cordoba", "AR", -31.40, -64.18),
    ("America", "Argentina/Salta", "AR", -24.78, -65.42),
    ("America", "Argentina/Ushuaia", "AR", -54.80, -68.30),
    ("Pacific", "Pago_Pago", "AS", -14.27, -170.70),
    ("Europe", "Vienna", "AT", 48.22, 16.33),
    ("Australia", "Lord_Howe", "AU", -31.55, 159.08),
    ("Australia", "Hobart", "AU", -42.88, 147.32),
    ("Australia", "Melbourne", "AU", -37.82, 144.97),
    ("Australia", "Sydney", "AU", -33.87, 151.22),
    ("Australia", "Broken_Hill", "AU", -31.95, 141.45),
    ("Australia", "Brisbane", "AU", -27.47, 153.03),
    ("Australia", "Lindeman", "AU", -20.27, 149.00),
    ("Australia", "Adelaide", "AU", -34.92, 138.58),
    ("Australia", "Darwin", "AU", -12.47, 130.83),
    ("Australia", "Perth", "AU", -31.95, 115.85),
    ("Australia", "Eucla", "AU", -31.72, 128.87),
    ("Asia", "Baku", "AZ", 40.38, 49.85),
    ("America", "Barbados", "BB", 13.10, -59.62),
    ("Asia", "Dhaka", "BD", 23.72, 90.42),
    ("Europe", "Brussels", "BE", 50.83, 4.33),
    ("Europe", "Sofia", "BG", 42.68, 23.32),
    ("Atlantic", "Bermuda", "BM", 32.28, -64.77),
    ("America", "La_Paz", "BO", -16.50, -68.15),
    ("America", "Noronha", "BR", -3.85, -32.42),
    ("America", "Belem", "BR", -1.45, -48.48),
    ("America", "Fortaleza", "BR", -3.72, -38.50),
    ("America", "Recife", "BR", -8.05, -34.88),
    ("America", "Bahia", "BR", -12.98, -38.52),
    ("America", "Sao_Paulo", "BR", -23.53, -46.62),
    ("America", "Manaus", "BR", -3.13, -60.02),
    ("America", "Rio_Branco", "BR", -9.97, -67.80),
    ("Asia", "Thimphu", "BT", 27.47, 89.65),
    ("Europe", "Minsk", "BY", 53.90, 27.57),
    ("America", "Belize", "BZ", 17.50, -88.20),
    ("America", "St_Johns", "CA", 47.57, -52.72),
    ("America", "Halifax", "CA", 44.65, -63.60),
    ("America", "Toronto", "CA", 43.65, -79.38),
    ("America", "Winnipeg", "CA", 49.88, -97.15),
    ("America", "Regina", "CA", 50.40, -104.65),
    ("America", "Edmonton", "CA", 53.55, -113.47),
    ("America", "Vancouver", "CA", 49.27, -123.12),
    ("America", "Iqaluit", "CA", 63.73, -68.47),
    ("America", "Resolute", "CA", 74.70, -94.83),
    ("America", "Whitehorse", "CA", 60.72, -135.05),
    ("Europe", "Zurich", "CH", 47.38, 8.53),
    ("Africa", "Abidjan", "CI", 5.32, -4.03),
    ("Pacific", "Rarotonga", "CK", -21.23, -159.77),
    ("America", "Santiago", "CL", -33.45, -70.67),
    ("Pacific", "Easter", "CL", -27.15, -109.43),
    ("Asia", "Shanghai", "CN", 31.23, 121.47),
    ("Asia", "Urumqi", "CN", 43.80, 87.58),
    ("America", "Bogota", "CO", 4.60, -74.08),
    ("America", "Costa_Rica", "CR", 9.93, -84.08),
    ("America", "Havana", "CU", 23.13, -82.37),
    ("Atlantic", "Cape_Verde", "CV", 14.92, -23.52),
    ("Asia", "Nicosia", "CY", 35.17, 33.37),
    ("Europe", "Prague", "CZ", 50.08, 14.43),
    ("Europe", "Berlin", "DE", 52.50, 13.37),
    ("America", "Santo_Domingo", "DO", 18.47, -69.90),
    ("Africa", "Algiers", "DZ", 36.78, 3.05),
    ("America", "Guayaquil", "EC", -2.17, -79.83),
    ("Pacific", "Galapagos", "EC", -0.90, -89.60),
    ("Europe", "Tallinn", "EE", 59.42, 24.75),
    ("Africa", "Cairo", "EG", 30.05, 31.25),
    ("Africa", "El_Aaiun", "EH", 27.15, -13.20),
    ("Europe", "Madrid", "ES", 40.40, -3.68),
    ("Africa", "Ceuta", "ES", 35.88, -5.32),
    ("Atlantic", "Canary", "ES", 28.10, -15.40),
    ("Europe", "Helsinki", "FI", 60.17, 24.97),
    ("Pacific", "Fiji", "FJ", -18.13, 178.42),
    ("Atlantic", "Stanley", "FK", -51.70, -57.85),
    ("Pacific", "Kosrae", "FM", 5.32, 162.98),
    ("Atlantic", "Faroe", "FO", 62.02, -6.77),
    ("Europe", "Paris", "FR", 48.87, 2.33),
    ("Europe", "London", "GB", 51.51, -0.13),
    ("Asia", "Tbilisi", "GE", 41.72, 44.82),
    ("America", "Cayenne", "GF", 4.93, -52.33),
    ("Europe", "Gibraltar", "GI", 36.13, -5.35),
    ("America", "Nuuk", "GL", 64.18, -51.73),
    ("America", "Danmarkshavn", "GL", 76.77, -18.67),
    ("America", "Scoresbysund", "GL", 70.48, -21.97),
    ("America", "Thule", "GL", 76.57, -68.78),
    ("Europe", "Athens", "GR", 37.97, 23.72),
    ("Atlantic", "South_Georgia", "GS", -54.27, -36.53),
    ("America", "Guatemala", "GT", 14.63, -90.52),
    ("Pacific", "Guam", "GU", 13.47, 144.75),
    ("America", "Guyana", "GY", 6.80, -58.17),
    ("Asia", "Hong_Kong", "HK", 22.28, 114.15),
    ("America", "Tegucigalpa", "HN", 14.10, -87.22),
    ("America", "Port-au-Prince", "HT", 18.53, -72.33),
    ("Europe", "Budapest", "HU", 47.50, 19.08),
    ("Asia", "Jakarta", "ID", -6.17, 106.80),
    ("Asia", "Pontianak", "ID", -0.03, 109.33),
    ("Asia", "Makassar", "ID", -5.12, 119.40),
    ("Asia", "Jayapura", "ID", -2.53, 140.70),
    ("Europe", "Dublin", "IE", 53.33, -6.25),
    ("Asia", "Jerusalem", "IL", 31.78, 35.22),
    ("Asia", "Kolkata", "IN", 22.53, 88.37),
    ("Indian", "Chagos", "IO", -7.33, 72.42),
    ("Asia", "Baghdad", "IQ", 33.35, 44.42),
    ("Asia", "Tehran", "IR", 35.67, 51.43),
    ("Atlantic", "Reykjavik", "IS", 64.15, -21.85),
    ("Europe", "Rome", "IT", 41.90, 12.48),
    ("America", "Jamaica", "JM", 17.97, -76.80),
    ("Asia", "Amman", "JO", 31.95, 35.93),
    ("Asia", "Tokyo", "JP", 35.65, 139.73),
    ("Africa", "Nairobi", "KE", -1.28, 36.82),
    ("Asia", "Bishkek", "KG", 42.90, 74.60),
    ("Pacific", "Tarawa", "KI", 1.42, 173.00),
    ("Pacific", "Kanton", "KI", -2.78, -171.72),
    ("Pacific", "Kiritimati", "KI", 1.87, -157.33),
    ("Asia", "Pyongyang", "KP", 39.02, 125.75),
    ("Asia", "Seoul", "KR", 37.55, 126.97),
    ("Asia", "Almaty", "KZ", 43.25, 76.95),
    ("Asia", "Qyzylorda", "KZ", 44.80, 65.47),
    ("Asia", "Aqtobe", "KZ", 50.28, 57.17),
    ("Asia", "Aqtau", "KZ", 44.52, 50.27),
    ("Asia", "Beirut", "LB", 33.88, 35.50),
    ("Asia", "Colombo", "LK", 6.93, 79.85),
    ("Africa", "Monrovia", "LR", 6.30, -10.78),
    ("Europe", "Vilnius", "LT", 54.68, 25.32),
    ("Europe", "Riga", "LV", 56.95, 24.10),
    ("Africa", "Tripoli", "LY", 32.90, 13.18),
    ("Africa", "Casablanca", "MA", 33.65, -7.58),
    ("Europe", "Chisinau", "MD", 47.00, 28.83),
    ("Pacific", "Kwajalein", "MH", 9.08, 167.33),
    ("Asia", "Yangon", "MM", 16.78, 96.17),
    ("Asia", "Ulaanbaatar", "MN", 47.92, 106.88),
    ("Asia", "Hovd", "MN", 48.02, 91.65),
    ("Asia", "Macau", "MO", 22.20, 113.55),
    ("America", "Martinique", "MQ", 14.60, -61.08),
    ("Europe", "Malta", "MT", 35.90, 14.52),
    ("Indian", "Mauritius", "MU", -20.17, 57.50),
    ("Indian", "Maldives", "MV", 4.17, 73.50),
    ("America", "Mexico_City", "MX", 19.40, -99.15),
    ("America", "Cancun", "MX", 21.08, -86.78),
    ("America", "Monterrey", "MX", 25.67, -100.32),
    ("America", "Chihuahua", "MX", 28.63, -106.08),
    ("America", "Hermosillo", "MX", 29.07, -110.97),
    ("America", "Tijuana", "MX", 32.53, -117.02),
    ("Asia", "Kuching", "MY", 1.55, 110.33),
    ("Africa", "Maputo", "MZ", -25.97, 32.58),
    ("Africa", "Windhoek", "NA", -22.57, 17.10),
    ("Pacific", "Noumea", "NC", -22.27, 166.45),
    ("Pacific", "Norfolk", "NF", -29.05, 167.97),
    ("Africa", "Lagos", "NG", 6.45, 3.40),
    ("America", "Managua", "NI", 12.15, -86.28),
    ("Europe", "Amsterdam", "NL", 52.37, 4.90),
    ("Europe", "Oslo", "NO", 59.92, 10.75),
    ("Arctic", "Longyearbyen", "SJ", 78.00, 16.00),
    ("Asia", "Kathmandu", "NP", 27.72, 85.32),
    ("Pacific", "Nauru", "NR", -0.52, 166.92),
    ("Pacific", "Niue", "NU", -19.02, -169.92),
    ("Pacific", "Auckland", "NZ", -36.87, 174.77),
    ("Pacific", "Chatham", "NZ", -43.95, -176.55),
    ("America", "Panama", "PA", 8.97, -79.53),
    ("America", "Lima", "PE", -12.05, -77.05),
    ("Pacific", "Tahiti", "PF", -17.53, -149.57),
    ("Pacific", "Marquesas", "PF", -9.00, -139.50),
    ("Pacific", "Gambier", "PF", -23.13, -134.95),
    ("Pacific", "Port_Moresby", "PG", -9.50, 147.17),
    ("Pacific", "Bougainville", "PG", -6.22, 155.57),
    ("Asia", "Manila", "PH", 14.58, 121.00),
    ("Asia", "Karachi", "PK", 24.87, 67.05),
    ("Europe", "Warsaw", "PL", 52.25, 21.00),
    ("America", "Miquelon", "PM", 47.05, -56.33),
    ("Pacific", "Pitcairn", "PN", -25.07, -130.08),
    ("America", "Puerto_Rico", "PR", 18.47, -66.10),
    ("Asia", "Gaza", "PS", 31.50, 34.47),
    ("Europe", "Lisbon", "PT", 38.72, -9.13),
    ("Atlantic", "Madeira", "PT", 32.63, -16.90),
    ("Atlantic", "Azores", "PT", 37.73, -25.67),
    ("Pacific", "Palau", "PW", 7.33, 134.48),
    ("America", "Asuncion", "PY", -25.27, -57.67),
    ("Asia", "Qatar", "QA", 25.28, 51.53),
    ("Indian", "Reunion", "RE", -20.87, 55.47),
    ("Europe", "Bucharest", "RO", 44.43, 26.10),
    ("Europe", "Belgrade", "RS", 44.83, 20.50),
    ("Europe", "Kaliningrad", "RU", 54.72, 20.50),
    ("Europe", "Moscow", "RU", 55.76, 37.62),
    ("Europe", "Samara", "RU", 53.20, 50.15),
    ("Asia", "Yekaterinburg", "RU", 56.85, 60.60),
    ("Asia", "Omsk", "RU", 55.00, 73.40),
    ("Asia", "Novosibirsk", "RU", 55.03, 82.92),
    ("Asia", "Krasnoyarsk", "RU", 56.02, 92.83),
    ("Asia", "Irkutsk", "RU", 52.27, 104.33),
    ("Asia", "Yakutsk", "RU", 62.00, 129.67),
    ("Asia", "Vladivostok", "RU", 43.17, 131.93),
    ("Asia", "Magadan", "RU", 59.57, 150.80),
    ("Asia", "Srednekolymsk", "RU", 67.47, 153.72),
    ("Asia", "Kamchatka", "RU", 53.02, 158.65),
    ("Asia", "Anadyr", "RU", 64.75, 177.48),
    ("Asia", "Riyadh", "SA", 24.63, 46.72),
    ("Pacific", "Guadalcanal", "SB", -9.53, 160.20),
    ("Indian", "Mahe", "SC", -4.67, 55.47),
    ("Africa", "Khartoum", "SD", 15.60, 32.53),
    ("Europe", "Stockholm", "SE", 59.33, 18.05),
    ("Asia", "Singapore", "SG", 1.28, 103.85),
    ("America", "Paramaribo", "SR", 5.83, -55.17),
    ("Africa", "Juba", "SS", 4.85, 31.62),
    ("Africa", "Sao_Tome", "ST", 0.33, 6.73),
    ("America", "El_Salvador", "SV", 13.70, -89.20),
    ("Asia", "Damascus", "SY", 33.50, 36.30),
    ("America", "Grand_Turk", "TC", 21.47, -71.13),
    ("Africa", "Ndjamena", "TD", 12.12, 15.05),
    ("Indian", "Kerguelen", "TF", -49.35, 70.22),
    ("Asia", "Bangkok", "TH", 13.75, 100.52),
    ("Asia", "Dushanbe", "TJ", 38.58, 68.80),
    ("Pacific", "Fakaofo", "TK", -9.37, -171.23),
    ("Asia", "Dili", "TL", -8.55, 125.58),
    ("Asia", "Ashgabat", "TM", 37.95, 58.38),
    ("Africa", "Tunis", "TN", 36.80, 10.18),
    ("Pacific", "Tongatapu", "TO", -21.13, -175.20),
    ("Europe", "Istanbul", "TR", 41.02, 28.97),
    ("Asia", "Taipei", "TW", 25.05, 121.50),
    ("Europe", "Kyiv", "UA", 50.43, 30.52),
    ("Europe", "Simferopol", "UA", 44.95, 34.10),
    ("Pacific", "Midway", "UM", 28.22, -177.37),
    ("Pacific", "Wake", "UM", 19.28, 166.62),
    ("America", "New_York", "US", 40.71, -74.01),
    ("America", "Detroit", "US", 42.33, -83.05),
    ("America", "Indiana/Indianapolis", "US", 39.77, -86.16),
    ("America", "Chicago", "US", 41.85, -87.65),
    ("America", "North_Dakota/Center", "US", 47.12, -101.30),
    ("America", "Denver", "US", 39.74, -104.98),
    ("America", "Boise", "US", 43.61, -116.20),
    ("America", "Phoenix", "US", 33.45, -112.07),
    ("America", "Los_Angeles", "US", 34.05, -118.24),
    ("America", "Anchorage", "US", 61.22, -149.90),
    ("America", "Juneau", "US", 58.30, -134.42),
    ("America", "Nome", "US", 64.50, -165.41),
    ("America", "Adak", "US", 51.88, -176.66),
    ("Pacific", "Honolulu", "US", 21.31, -157.86),
    ("America", "Montevideo", "UY", -34.91, -56.21),
    ("Asia", "Tashkent", "UZ", 41.33, 69.30),
    ("Asia", "Samarkand", "UZ", 39.67, 66.80),
    ("America", "Caracas", "VE", 10.50, -66.93),
    ("Asia", "Ho_Chi_Minh", "VN", 10.75, 106.67),
    ("Pacific", "Efate", "VU", -17.67, 168.42),
    ("Pacific", "Wallis", "WF", -13.30, -176.17),
    ("Pacific", "Apia", "WS", -13.83, -171.73),
    ("Africa", "Johannesburg", "ZA", -26.25, 28.00),
)

# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def embedded_records() -> list[ZoneRecord]:
    return [ZoneRecord(*row) for row in ZONES]


def _record_from_entry(i: int, entry: dict) -> ZoneRecord:
    if not isinstance(entry, dict):
        raise CatalogueError(f"dataset entry #{i}: expected an object, got {type(entry).__name__}")
    if "tz" in entry:
        region, sep, zone = str(entry["tz"]).partition("/")
        if not sep or not zone:
            raise CatalogueError(f"dataset entry #{i}: tz {entry['tz']!r} is not Region/Zone")
    else:
        region, zone = entry.get("region"), entry.get("zone")
        if not region or not zone:
            raise CatalogueError(f"dataset entry #{i} {entry!r}: needs region and zone, or tz")
    try:
        return ZoneRecord(
            region=str(region),
            zone=str(zone),
            country=str(entry.get("country", "")),
            latitude=float(entry["latitude"]),
            longitude=float(entry["longitude"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogueError(f"dataset entry #{i} {entry!r}: bad or missing {e}") from e


def load_dataset(path: Path | str) -> list[ZoneRecord]:
    """Read zone records from a JSON dataset file. A missing file yields no records."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        log.warning("dataset file %s not found, no zones loaded", path)
        return []
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogueError(f"dataset file {path}: {e}") from e
    if not isinstance(data, list):
        raise CatalogueError(f"dataset file {path}: expected a list of zones")
    return [_record_from_entry(i, entry) for i, entry in enumerate(data)]


def default_catalogue() -> Catalogue:
    """Catalogue from TZCAT_DATASET_FILE if set, else the embedded table."""
    if DATASET_FILE:
        log.debug("loading zones from %s", DATASET_FILE)
        return Catalogue.build(load_dataset(DATASET_FILE))
    return Catalogue.build(embedded_records())


def dataset_source() -> str:
    return DATASET_FILE or "embedded"

"""Internal constants shared across the library."""

BASE_URL = "wss://api.geops.io/realtime-ws/v1/"
LOG_PATH = "s-bahn-munich-live-map.jsonl"
TENANT = "sbm"

# Spherical mercator bounding box around Munich.
BBOX: tuple[int, int, int, int] = (1152072, 6048052, 1433666, 6205578)
ZOOM = 5
BUFFER: tuple[int, int] = (100, 100)

# Subscription order matters to the server only in that GET precedes SUB.
TOPICS: tuple[str, ...] = (
    "extra_geoms",
    "healthcheck",
    "sbm_newsticker",
    "station_schematic",
    "deleted_vehicles_schematic",
    "trajectory_schematic",
    "station",
    "deleted_vehicles",
    "trajectory",
)

PING_COMMAND = "PING"
PING_INTERVAL_SECONDS = 10.0

# ------------------------------------------------------------------
# Replay screen projection
# ------------------------------------------------------------------

LONGITUDE_RANGE: tuple[float, float] = (11.0, 12.0)
LATITUDE_RANGE: tuple[float, float] = (47.5, 48.5)
BACKGROUND_COLOR = 0x9E9E9E
VEHICLE_RADIUS = 5.0
FRAME_DELAY_SECONDS = 0.02

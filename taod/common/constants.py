"""Application constants."""

EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "row",
    "column",
    "message",
)
# Coordinates in the source dataset are JGD2011 geographic.
SOURCE_EPSG = 6668

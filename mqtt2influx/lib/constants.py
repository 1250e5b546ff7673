"""
  File with all constants in project
"""
# MQTT
CLIENT_ID_PREFIX = "MQTT2Influx-"
DEFAULT_MQTT_PORT = 1883
MQTT_KEEPALIVE = 60
MQTT_QOS = 0  # at most once
TOPIC_WILDCARD_SUFFIX = "/#"
DEFAULT_CONNECT_TIMEOUT = 30.0  # seconds
CONNECT_POLL_INTERVAL = 3.0  # seconds between "still connecting" log lines

# InfluxDB
DEFAULT_INFLUX_ORG = "-"  # InfluxDB 1.8 compatibility API ignores org
DEFAULT_INFLUX_TIMEOUT_MS = 10_000

# Watchdog
DEFAULT_WATCHDOG_INTERVAL = 300  # seconds

# xiaomi magnet mapping, first one is the default
MAGNET_POLICIES = ("open_is_one", "open_is_zero")

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

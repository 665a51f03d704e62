"""Constants shared across p4edit."""

P4_PROGRAM_DEFAULT = "p4"
P4_PROGRAM_WINDOWS = "p4.exe"

# Name of the environment variable that overrides the config file name.
P4CONFIG_ENV = "P4CONFIG"
P4CONFIG_FALLBACK_FILENAMES = ("P4CONFIG", ".p4config")
P4CONFIG_CLIENT_KEYS = ("P4CLIENT", "CLIENT")

CLIENTS_FORMAT = "%client%;%Root%;%Host%"
CLIENTS_FIELD_SEPARATOR = ";"

COMMAND_TIMEOUT_DEFAULT = 30.0

OUTPUT_LOGGER_NAME = "p4edit.output"
DEFAULT_CONFIG_FILENAME = "config.json"

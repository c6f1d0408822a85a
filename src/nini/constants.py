"""Fixed names shared across Nini."""

APP_NAME = "nini"
ENV_PREFIX = "NINI_"

ROOT_TAG = "Nini"
SECTION_TAG = "Section"
KEY_TAG = "Key"
NAME_ATTR = "Name"
VALUE_ATTR = "Value"

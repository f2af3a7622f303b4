from zoneinfo import ZoneInfo

from pixcharge import __version__

SP_TZ = ZoneInfo("America/Sao_Paulo")

SERVER_NAME = "pix-mcp-server"
SERVER_VERSION = __version__

# EMV / BR Code field tags
TAG_PAYLOAD_FORMAT = "00"
TAG_POINT_OF_INITIATION = "01"
TAG_MERCHANT_ACCOUNT = "26"
TAG_MERCHANT_CATEGORY = "52"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY = "58"
TAG_MERCHANT_NAME = "59"
TAG_MERCHANT_CITY = "60"
TAG_ADDITIONAL_DATA = "62"
TAG_CRC = "63"

# Sub-tags of the nested templates
SUBTAG_GUI = "00"
SUBTAG_PIX_KEY = "01"
SUBTAG_REFERENCE_LABEL = "05"

PAYLOAD_FORMAT_INDICATOR = "01"
STATIC_INITIATION = "12"
PIX_GUI = "BR.GOV.BCB.PIX"
MERCHANT_CATEGORY_CODE = "0000"
CURRENCY_BRL = "986"
COUNTRY_CODE = "BR"
CRC_LENGTH = "04"

MAX_FIELD_LENGTH = 99
MAX_NAME_LENGTH = 25
MAX_CITY_LENGTH = 15
MAX_DESCRIPTION_LENGTH = 25
# 99 minus the GUI sub-field (4 + 14) and the key sub-field header (4)
MAX_KEY_LENGTH = 77

MAX_AMOUNT_CENTS = 99999999

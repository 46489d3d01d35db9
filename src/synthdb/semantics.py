"""Semantic categories assigned to columns.

The category set is closed: every member must have a generation rule in
``synthdb.generators.semantic``.
"""

from dataclasses import dataclass
from enum import Enum


class SemanticType(str, Enum):
    """Inferred meaning of a column."""

    # identity
    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    UUID = "uuid"

    # personal
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    FULL_NAME = "full_name"
    USERNAME = "username"
    GENDER = "gender"
    DATE_OF_BIRTH = "date_of_birth"
    AGE = "age"
    JOB_TITLE = "job_title"

    # organizational
    COMPANY_NAME = "company_name"
    DEPARTMENT = "department"
    PRODUCT_NAME = "product_name"

    # geographic
    STREET_ADDRESS = "street_address"
    CITY = "city"
    STATE = "state"
    COUNTRY = "country"
    COUNTRY_CODE = "country_code"
    POSTAL_CODE = "postal_code"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    TIMEZONE = "timezone"

    # contact
    EMAIL = "email"
    PHONE = "phone"

    # web / network
    URL = "url"
    DOMAIN_NAME = "domain_name"
    HOSTNAME = "hostname"
    IPV4_ADDRESS = "ipv4_address"
    MAC_ADDRESS = "mac_address"
    PORT = "port"
    USER_AGENT = "user_agent"

    # temporal
    START_DATE = "start_date"
    END_DATE = "end_date"
    UPDATE_DATE = "update_date"
    TIMESTAMP = "timestamp"
    TIME = "time"
    YEAR = "year"

    # financial
    MONEY = "money"
    CURRENCY_CODE = "currency_code"
    PERCENTAGE = "percentage"
    CREDIT_CARD = "credit_card"
    IBAN = "iban"

    # cryptographic-looking
    PASSWORD_HASH = "password_hash"
    HASH = "hash"
    TOKEN = "token"

    # status / classification
    STATUS = "status"
    PRIORITY = "priority"
    SKILL_LEVEL = "skill_level"
    CLASSIFICATION = "classification"
    ROLE = "role"
    CATEGORY = "category"

    # code / identifier
    IDENTIFIER_CODE = "identifier_code"

    # domain fiction
    FICTION_PLACE = "fiction_place"

    # content
    TITLE = "title"
    DESCRIPTION = "description"
    BODY_TEXT = "body_text"
    TAGS = "tags"
    COLOR = "color"
    LANGUAGE = "language"

    # file / path
    FILE_NAME = "file_name"
    FILE_PATH = "file_path"
    MIME_TYPE = "mime_type"

    # measurement
    QUANTITY = "quantity"
    WEIGHT = "weight"
    DIMENSION = "dimension"
    DURATION = "duration"
    CAPACITY = "capacity"
    RATING = "rating"

    # version
    VERSION = "version"

    # declared-type fallbacks
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    TEXT = "text"
    JSON = "json"
    ARRAY = "array"
    UNKNOWN = "unknown"


DEFAULT_PRIORITY = 0

# Higher runs first within a row. Derived fields (username, domain, url, email)
# read values written to the row context by the fields above them.
GENERATION_PRIORITY: dict[SemanticType, int] = {
    SemanticType.PRIMARY_KEY: 100,
    SemanticType.FOREIGN_KEY: 95,
    SemanticType.FIRST_NAME: 90,
    SemanticType.LAST_NAME: 90,
    SemanticType.FULL_NAME: 85,
    SemanticType.COMPANY_NAME: 80,
    SemanticType.START_DATE: 70,
    SemanticType.USERNAME: 40,
    SemanticType.DOMAIN_NAME: 30,
    SemanticType.URL: 25,
    SemanticType.EMAIL: 20,
}

# Keys under which the row context keeps well-known roles
CONTEXT_ROLE_KEYS: dict[SemanticType, str] = {
    SemanticType.FIRST_NAME: "first_name",
    SemanticType.LAST_NAME: "last_name",
    SemanticType.FULL_NAME: "full_name",
    SemanticType.USERNAME: "username",
    SemanticType.COMPANY_NAME: "company_name",
    SemanticType.DOMAIN_NAME: "domain_name",
}

STATUS_VALUES = (
    "active",
    "inactive",
    "pending",
    "suspended",
    "archived",
    "completed",
    "cancelled",
)
SKILL_LEVELS = ("beginner", "novice", "intermediate", "advanced", "expert", "master")
PRIORITY_LEVELS = ("low", "medium", "high", "critical", "urgent")
CLASSIFICATION_LEVELS = ("public", "internal", "confidential", "restricted", "secret")
ROLES = ("admin", "manager", "editor", "member", "viewer", "guest")
CATEGORIES = (
    "General",
    "Electronics",
    "Books",
    "Clothing",
    "Home",
    "Sports",
    "Toys",
    "Grocery",
)
DEPARTMENTS = (
    "Engineering",
    "Sales",
    "Marketing",
    "Finance",
    "Human Resources",
    "Operations",
    "Legal",
    "Support",
)
GENDERS = ("female", "male", "non-binary", "unspecified")

FICTION_PREFIXES = (
    "Nova",
    "Obsidian",
    "Crimson",
    "Zenith",
    "Iron",
    "Echo",
    "Solar",
    "Void",
    "Aurora",
    "Titan",
    "Umbra",
    "Vanguard",
)
FICTION_SUFFIXES = (
    "Prime",
    "Outpost",
    "Station",
    "Reach",
    "Expanse",
    "Nexus",
    "Haven",
    "Drift",
    "Bastion",
    "Citadel",
    "Frontier",
    "Spire",
)

PRODUCT_ADJECTIVES = ("Ergonomic", "Compact", "Deluxe", "Rugged", "Sleek", "Smart")
PRODUCT_MATERIALS = ("Steel", "Cotton", "Wooden", "Granite", "Plastic", "Leather")
PRODUCT_NOUNS = ("Chair", "Lamp", "Backpack", "Keyboard", "Bottle", "Table", "Watch")

EMAIL_PROVIDERS = ("gmail.com", "yahoo.com", "outlook.com", "proton.me", "icloud.com")


@dataclass(frozen=True)
class SemanticCategory:
    """
    Classification result for one column.

    Attributes:
        type: Assigned semantic type
        referenced_table: Parent table for FOREIGN_KEY categories
        self_reference: Whether a FOREIGN_KEY points at its own table
    """

    type: SemanticType
    referenced_table: str | None = None
    self_reference: bool = False

    @property
    def priority(self) -> int:
        """Generation priority (higher is generated earlier in a row)."""
        return GENERATION_PRIORITY.get(self.type, DEFAULT_PRIORITY)

    @property
    def context_key(self) -> str | None:
        """Derived context key for well-known roles, if any."""
        return CONTEXT_ROLE_KEYS.get(self.type)

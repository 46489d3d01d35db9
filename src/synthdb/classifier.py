"""Semantic column classification.

Classification is a pure function of the column, its table, its foreign-key
status and its sample values. Evaluation order, first match wins:

1. foreign key
2. primary key naming convention
3. pattern inference on the first sample value
4. declared-type shortcuts (uuid, boolean)
5. ordered name rules (``NAME_RULES``)
6. declared-type fallback
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from synthdb.models import ColumnInfo, DataType, TableInfo
from synthdb.semantics import (
    PRIORITY_LEVELS,
    SKILL_LEVELS,
    STATUS_VALUES,
    SemanticCategory,
    SemanticType as S,
)

# Declared types each rule kind may produce values for
TEXTUAL = frozenset({DataType.TEXT, DataType.UNKNOWN})
NUMERIC = TEXTUAL | {DataType.INTEGER, DataType.DECIMAL, DataType.FLOAT}
TEMPORAL = TEXTUAL | {DataType.DATE, DataType.TIMESTAMP}
IP = TEXTUAL | {DataType.INET}
MAC = TEXTUAL | {DataType.MACADDR}
LISTLIKE = TEXTUAL | {DataType.ARRAY}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def normalize_name(name: str) -> str:
    """
    Normalize a column or table name for matching.

    Examples:
        >>> normalize_name("createdAt")
        'created_at'
        >>> normalize_name(" Email ")
        'email'
    """
    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


def name_tokens(name: str) -> frozenset[str]:
    """Split a normalized name into its words."""
    return frozenset(t for t in _TOKEN_SPLIT.split(name) if t)


@dataclass(frozen=True)
class NameRule:
    """
    One name-based classification rule.

    A rule matches when the declared type is accepted, the table filter (if
    any) matches, no exclusion is present, and at least one of ``exact``,
    ``contains`` or ``tokens`` matches the normalized column name.

    Attributes:
        category: Category assigned on match
        contains: Substrings of the column name
        tokens: Whole words of the column name (split on non-alphanumerics)
        exact: Complete column names
        excludes: Substrings that veto the rule
        exclude_tokens: Whole words that veto the rule
        tables: Substrings of the table name, at least one required when set
        accepts: Declared types the category can produce values for
    """

    category: S
    contains: tuple[str, ...] = ()
    tokens: tuple[str, ...] = ()
    exact: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    exclude_tokens: tuple[str, ...] = ()
    tables: tuple[str, ...] = ()
    accepts: frozenset[DataType] = TEXTUAL

    def matches(self, name: str, table: str, data_type: DataType) -> bool:
        """Whether the rule applies to a normalized column name."""
        if data_type not in self.accepts:
            return False
        if self.tables and not any(t in table for t in self.tables):
            return False

        words = name_tokens(name)
        if any(e in name for e in self.excludes):
            return False
        if words.intersection(self.exclude_tokens):
            return False

        return (
            name in self.exact
            or any(k in name for k in self.contains)
            or bool(words.intersection(self.tokens))
        )


_ORGANIZATION_TABLES = (
    "compan",
    "organi",
    "vendor",
    "supplier",
    "manufacturer",
    "client",
    "business",
    "employer",
    "agenc",
    "brand",
    "publisher",
)
_FICTION_WORDS = (
    "sector",
    "outpost",
    "planet",
    "station",
    "colony",
    "galax",
    "starbase",
    "starship",
    "nebula",
    "realm",
)

NAME_RULES: tuple[NameRule, ...] = (
    # identity
    NameRule(S.UUID, contains=("uuid", "guid")),
    # contact and network; listed before street address and generic name
    NameRule(S.EMAIL, contains=("email", "e_mail"), tokens=("mail",)),
    NameRule(
        S.MAC_ADDRESS,
        contains=("mac_address", "macaddr", "mac_addr", "hwaddr", "hardware_address"),
        tokens=("mac",),
        accepts=MAC,
    ),
    NameRule(
        S.IPV4_ADDRESS,
        contains=("ip_address", "ipaddress", "ipaddr", "ipv4"),
        tokens=("ip",),
        accepts=IP,
    ),
    NameRule(S.PORT, contains=("port_number",), tokens=("port",), accepts=NUMERIC),
    NameRule(
        S.PHONE,
        contains=("phone", "mobile", "telephone"),
        tokens=("tel", "cell", "fax"),
    ),
    NameRule(S.USER_AGENT, contains=("user_agent", "useragent")),
    NameRule(
        S.URL,
        contains=("url", "website", "homepage", "web_site"),
        tokens=("uri", "link", "href"),
    ),
    NameRule(S.DOMAIN_NAME, contains=("domain",)),
    NameRule(S.HOSTNAME, contains=("hostname", "host_name", "server_name"), tokens=("host",)),
    # personal
    NameRule(
        S.USERNAME,
        contains=("username", "user_name", "screen_name", "nickname", "login_name"),
        exact=("login", "handle", "user"),
    ),
    NameRule(
        S.FIRST_NAME,
        contains=("first_name", "firstname", "given_name", "forename"),
        tokens=("fname",),
    ),
    NameRule(
        S.LAST_NAME,
        contains=("last_name", "lastname", "surname", "family_name"),
        tokens=("lname",),
    ),
    NameRule(S.GENDER, tokens=("gender", "sex")),
    NameRule(S.DATE_OF_BIRTH, contains=("birth",), tokens=("dob",), accepts=TEMPORAL),
    NameRule(S.AGE, tokens=("age",), accepts=NUMERIC),
    NameRule(
        S.JOB_TITLE,
        contains=("job_title", "occupation", "designation"),
        tokens=("job", "position"),
    ),
    # organizational
    NameRule(
        S.COMPANY_NAME,
        contains=(
            "company",
            "organization",
            "organisation",
            "employer",
            "business_name",
            "firm_name",
            "vendor_name",
            "supplier_name",
            "manufacturer",
        ),
        excludes=("_id", "_type", "_size", "_count"),
    ),
    NameRule(
        S.COMPANY_NAME,
        exact=("name", "display_name", "legal_name"),
        tables=_ORGANIZATION_TABLES,
    ),
    NameRule(S.DEPARTMENT, contains=("department",), tokens=("dept", "division", "team")),
    # domain fiction
    NameRule(S.FICTION_PLACE, contains=_FICTION_WORDS),
    NameRule(S.FICTION_PLACE, exact=("name",), tables=_FICTION_WORDS),
    NameRule(S.PRODUCT_NAME, contains=("product_name", "item_name", "product_title")),
    NameRule(
        S.PRODUCT_NAME,
        exact=("name", "title"),
        tables=("product", "item", "merchandise", "catalog"),
    ),
    # file / path
    NameRule(S.FILE_NAME, contains=("file_name", "filename", "attachment"), exact=("file",)),
    NameRule(
        S.FILE_PATH,
        contains=("file_path", "filepath", "directory", "folder"),
        tokens=("path", "dir"),
    ),
    NameRule(S.MIME_TYPE, contains=("mime", "content_type", "media_type")),
    # geographic
    NameRule(
        S.STREET_ADDRESS,
        contains=("address", "street", "addr"),
        exact=("shipping", "billing"),
        excludes=("email", "ip_addr", "mac_addr"),
        exclude_tokens=("mac", "ip", "email"),
    ),
    NameRule(S.CITY, contains=("city",), tokens=("town",)),
    NameRule(S.COUNTRY_CODE, contains=("country_code", "iso_country")),
    NameRule(S.COUNTRY, contains=("country", "nationality")),
    NameRule(
        S.STATE,
        contains=("state_name", "province"),
        exact=("state",),
        tokens=("region", "county"),
    ),
    NameRule(S.POSTAL_CODE, contains=("zip", "postal", "postcode")),
    NameRule(S.LATITUDE, tokens=("lat", "latitude"), accepts=NUMERIC),
    NameRule(S.LONGITUDE, tokens=("lng", "lon", "longitude"), accepts=NUMERIC),
    NameRule(S.TIMEZONE, contains=("timezone", "time_zone"), tokens=("tz",)),
    # status / classification
    NameRule(S.STATUS, contains=("status",)),
    NameRule(S.PRIORITY, contains=("priority", "urgency", "severity")),
    NameRule(
        S.SKILL_LEVEL,
        contains=("skill", "proficiency", "expertise", "seniority"),
        tokens=("level",),
    ),
    NameRule(
        S.CLASSIFICATION,
        contains=("classification", "clearance", "sensitivity", "confidentiality"),
    ),
    NameRule(S.ROLE, tokens=("role",)),
    NameRule(S.CATEGORY, contains=("category", "genre"), tokens=("kind", "segment")),
    # generic name
    NameRule(S.FULL_NAME, contains=("full_name", "fullname", "display_name")),
    NameRule(
        S.FULL_NAME,
        contains=("name",),
        excludes=("username", "user_name", "file", "domain", "host"),
    ),
    # temporal
    NameRule(
        S.START_DATE,
        contains=(
            "created",
            "established",
            "start",
            "launch",
            "founded",
            "signed_at",
            "signed_on",
            "signup",
            "hire_date",
            "join_date",
            "effective",
        ),
        tokens=("signed", "opened", "joined", "hired", "registered", "enrolled", "began"),
        excludes=("_by",),
        accepts=TEMPORAL,
    ),
    NameRule(
        S.END_DATE,
        contains=("end_date", "expir", "terminat", "valid_until", "due_date", "deadline"),
        tokens=("end", "ended", "ends", "expires", "closed", "finished", "until", "due"),
        excludes=("_by",),
        accepts=TEMPORAL,
    ),
    NameRule(
        S.UPDATE_DATE,
        contains=("updated", "modified", "changed", "last_seen", "last_login", "synced"),
        excludes=("_by",),
        accepts=TEMPORAL,
    ),
    NameRule(
        S.TIMESTAMP,
        contains=("timestamp", "datetime"),
        tokens=("at", "date", "time", "ts", "dt", "when"),
        accepts=TEMPORAL,
    ),
    NameRule(S.YEAR, tokens=("year", "yr"), accepts=NUMERIC),
    # financial
    NameRule(S.CURRENCY_CODE, contains=("currency",)),
    NameRule(S.CREDIT_CARD, contains=("credit_card", "card_number", "cc_number")),
    NameRule(S.IBAN, contains=("iban", "account_number", "bank_account")),
    NameRule(
        S.PERCENTAGE,
        contains=("percent", "pct"),
        tokens=("rate", "ratio"),
        accepts=NUMERIC,
    ),
    NameRule(
        S.MONEY,
        contains=(
            "price",
            "amount",
            "cost",
            "salary",
            "balance",
            "revenue",
            "total",
            "budget",
            "payment",
            "income",
            "wage",
            "tax",
            "discount",
            "profit",
        ),
        tokens=("fee", "fees"),
        excludes=("_id", "number", "code", "count"),
        accepts=NUMERIC,
    ),
    # cryptographic-looking
    NameRule(S.PASSWORD_HASH, contains=("password", "passwd"), tokens=("pwd",)),
    NameRule(
        S.HASH,
        contains=("hash", "checksum", "digest", "fingerprint"),
        tokens=("sha", "sha1", "sha256", "md5"),
    ),
    NameRule(
        S.TOKEN,
        contains=("token", "api_key", "apikey", "secret", "nonce", "access_key"),
        tokens=("salt",),
    ),
    # code / identifier
    NameRule(
        S.IDENTIFIER_CODE,
        contains=(
            "sku",
            "tracking",
            "serial",
            "badge",
            "reference",
            "barcode",
            "confirmation",
            "invoice_number",
            "order_number",
            "license",
            "voucher",
            "coupon",
        ),
        tokens=("code", "ref", "number", "no", "id"),
        excludes=("postal", "zip", "country", "currency", "color", "colour", "lang", "phone"),
    ),
    # content
    NameRule(S.TITLE, contains=("title", "headline", "subject", "heading", "caption")),
    NameRule(
        S.DESCRIPTION,
        contains=("description", "desc", "summary", "bio", "overview", "abstract", "excerpt"),
        tokens=("about",),
    ),
    NameRule(
        S.BODY_TEXT,
        contains=("body", "comment", "content", "notes", "message", "review", "feedback", "remark"),
        tokens=("text", "note"),
    ),
    NameRule(S.TAGS, contains=("tags", "keywords", "labels"), accepts=LISTLIKE),
    NameRule(S.COLOR, contains=("color", "colour")),
    NameRule(S.LANGUAGE, contains=("language", "locale"), tokens=("lang",)),
    # measurement
    NameRule(S.CAPACITY, contains=("capacity",), accepts=NUMERIC),
    NameRule(
        S.QUANTITY,
        contains=("quantity", "qty", "stock", "inventory", "_count", "num_"),
        tokens=("count", "units"),
        accepts=NUMERIC,
    ),
    NameRule(S.WEIGHT, contains=("weight",), tokens=("mass", "kg", "lbs", "grams"), accepts=NUMERIC),
    NameRule(
        S.DIMENSION,
        tokens=("height", "width", "length", "depth", "size", "area", "volume", "distance", "radius"),
        accepts=NUMERIC,
    ),
    NameRule(
        S.DURATION,
        contains=("duration", "elapsed"),
        tokens=("minutes", "seconds", "hours", "days", "ms"),
        accepts=NUMERIC,
    ),
    NameRule(S.RATING, contains=("rating", "score", "stars"), accepts=NUMERIC),
    # version
    NameRule(S.VERSION, contains=("version", "semver"), tokens=("release",), accepts=NUMERIC),
)

# Declared-type fallback when no name rule matched
TYPE_FALLBACKS: dict[DataType, S] = {
    DataType.INTEGER: S.INTEGER,
    DataType.DECIMAL: S.DECIMAL,
    DataType.FLOAT: S.DECIMAL,
    DataType.BOOLEAN: S.BOOLEAN,
    DataType.TEXT: S.TEXT,
    DataType.DATE: S.TIMESTAMP,
    DataType.TIMESTAMP: S.TIMESTAMP,
    DataType.TIME: S.TIME,
    DataType.UUID: S.UUID,
    DataType.JSON: S.JSON,
    DataType.ARRAY: S.ARRAY,
    DataType.INET: S.IPV4_ADDRESS,
    DataType.MACADDR: S.MAC_ADDRESS,
    DataType.UNKNOWN: S.UNKNOWN,
}


def singularize(word: str) -> str:
    """Naive English singular of a table name (companies -> company)."""
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith(("ses", "xes", "ches", "shes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def is_primary_key_name(column: str, table: str) -> bool:
    """
    Primary-key naming convention: ``id`` or ``<table>_id``.

    Other ``*_id`` columns are not treated as the table's own key.
    """
    name = normalize_name(column)
    table_name = normalize_name(table)
    if name == "id":
        return True
    return name in (f"{table_name}_id", f"{singularize(table_name)}_id")


def infer_from_sample(value: str) -> S | None:
    """
    Classify a column from one of its real values.

    Examples:
        >>> infer_from_sample("00:1a:2b:3c:4d:5e")
        <SemanticType.MAC_ADDRESS: 'mac_address'>
        >>> infer_from_sample("10.0.0.1")
        <SemanticType.IPV4_ADDRESS: 'ipv4_address'>
    """
    text = value.strip()
    if text.count(":") == 5 and len(text) == 17:
        return S.MAC_ADDRESS

    parts = text.split(".")
    if len(parts) == 4 and all(p.isdigit() and int(p) <= 255 for p in parts):
        return S.IPV4_ADDRESS

    if "@" in text and "." in text:
        return S.EMAIL

    lowered = text.lower()
    if lowered in STATUS_VALUES:
        return S.STATUS
    if lowered in SKILL_LEVELS:
        return S.SKILL_LEVEL
    if lowered in PRIORITY_LEVELS:
        return S.PRIORITY
    return None


class SemanticClassifier:
    """Assign a semantic category to each column."""

    def __init__(self, rules: Sequence[NameRule] = NAME_RULES):
        self.rules = tuple(rules)

    def classify(
        self,
        column: ColumnInfo,
        table: str,
        is_foreign_key: bool = False,
        referenced_table: str | None = None,
        sample_values: Sequence[str] | None = None,
    ) -> SemanticCategory:
        """
        Classify one column.

        Args:
            column: Column metadata
            table: Name of the column's table
            is_foreign_key: Whether the column owns a foreign key
            referenced_table: Parent table when is_foreign_key
            sample_values: Real values; defaults to ``column.sample_values``

        Returns:
            The column's SemanticCategory
        """
        if is_foreign_key:
            return SemanticCategory(
                S.FOREIGN_KEY,
                referenced_table=referenced_table,
                self_reference=referenced_table == table,
            )

        if column.is_primary_key or is_primary_key_name(column.name, table):
            return SemanticCategory(S.PRIMARY_KEY)

        samples = column.sample_values if sample_values is None else sample_values
        if samples:
            inferred = infer_from_sample(str(samples[0]))
            if inferred is not None:
                return SemanticCategory(inferred)

        data_type = column.data_type
        if data_type == DataType.UUID:
            return SemanticCategory(S.UUID)
        if data_type == DataType.BOOLEAN:
            return SemanticCategory(S.BOOLEAN)

        rule = self.match_rule(column.name, table, data_type)
        if rule is not None:
            return SemanticCategory(rule.category)

        return SemanticCategory(TYPE_FALLBACKS[data_type])

    def classify_column(self, column: ColumnInfo, table: TableInfo) -> SemanticCategory:
        """Classify a column using the foreign keys declared on its table."""
        fk = table.foreign_key_for(column.name)
        if fk is not None:
            return SemanticCategory(
                S.FOREIGN_KEY,
                referenced_table=fk.referenced_table,
                self_reference=fk.is_self_referencing,
            )
        return self.classify(column, table.name)

    def match_rule(self, column: str, table: str, data_type: DataType) -> NameRule | None:
        """First name rule matching the column, or None."""
        name = normalize_name(column)
        table_name = normalize_name(table)
        for rule in self.rules:
            if rule.matches(name, table_name, data_type):
                return rule
        return None

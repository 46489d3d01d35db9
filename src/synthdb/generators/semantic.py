"""Faker-backed value synthesis per semantic category."""

import logging
import random
import re
import string
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from faker import Faker

from synthdb.context import RowContext
from synthdb.models import ColumnInfo, DataType
from synthdb.pool import ReferencePool
from synthdb.semantics import (
    CATEGORIES,
    CLASSIFICATION_LEVELS,
    DEPARTMENTS,
    EMAIL_PROVIDERS,
    FICTION_PREFIXES,
    FICTION_SUFFIXES,
    GENDERS,
    PRIORITY_LEVELS,
    PRODUCT_ADJECTIVES,
    PRODUCT_MATERIALS,
    PRODUCT_NOUNS,
    ROLES,
    SKILL_LEVELS,
    STATUS_VALUES,
    SemanticCategory,
    SemanticType as S,
)

logger = logging.getLogger(__name__)

# Assumed when a decimal column has a scale but no usable precision
DEFAULT_PRECISION = 5

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_BCRYPT_ALPHABET = "./" + string.ascii_letters + string.digits

# Categories served directly by a Faker provider method
FAKER_METHODS: dict[S, str] = {
    S.FIRST_NAME: "first_name",
    S.LAST_NAME: "last_name",
    S.COMPANY_NAME: "company",
    S.JOB_TITLE: "job",
    S.STREET_ADDRESS: "street_address",
    S.CITY: "city",
    S.STATE: "state",
    S.COUNTRY: "country",
    S.COUNTRY_CODE: "country_code",
    S.POSTAL_CODE: "postcode",
    S.TIMEZONE: "timezone",
    S.PHONE: "phone_number",
    S.HOSTNAME: "hostname",
    S.USER_AGENT: "user_agent",
    S.CURRENCY_CODE: "currency_code",
    S.CREDIT_CARD: "credit_card_number",
    S.IBAN: "iban",
    S.FILE_NAME: "file_name",
    S.MIME_TYPE: "mime_type",
    S.COLOR: "color_name",
    S.LANGUAGE: "language_code",
}

# Categories drawn uniformly from a closed vocabulary
VOCABULARIES: dict[S, tuple[str, ...]] = {
    S.STATUS: STATUS_VALUES,
    S.PRIORITY: PRIORITY_LEVELS,
    S.SKILL_LEVEL: SKILL_LEVELS,
    S.CLASSIFICATION: CLASSIFICATION_LEVELS,
    S.ROLE: ROLES,
    S.CATEGORY: CATEGORIES,
    S.DEPARTMENT: DEPARTMENTS,
    S.GENDER: GENDERS,
}


def slug(text: str) -> str:
    """Lower-case a value and strip everything but letters and digits."""
    return _NON_ALNUM.sub("", text.lower())


def domain_from_organization(name: str | None) -> str | None:
    """
    Derive a domain from an organization name.

    Examples:
        >>> domain_from_organization("Smith, Jones & Co")
        'smithjonesco.com'
    """
    if not name:
        return None
    base = slug(name)
    return f"{base}.com" if base else None


class ValueSynthesizer:
    """
    Generate one value for a column given its semantic category.

    Randomness comes from the injected ``random.Random`` and ``Faker``
    instances, so a seeded synthesizer produces the same values on every run.
    Values are plain Python objects (int, Decimal, str, bool, date, datetime,
    UUID, list, dict, or None for NULL); rendering them as SQL literals is the
    writer's job.

    Example:
        >>> synth = ValueSynthesizer.seeded(42)
        >>> ctx = RowContext()
        >>> ctx.set("first_name", "Ada")
        >>> ctx.set("last_name", "Lovelace")
        >>> synth.synthesize(SemanticCategory(S.USERNAME), column, ctx, 0)
        'ada.lovelace'
    """

    def __init__(
        self,
        rng: random.Random,
        faker: Faker | None = None,
        pool: ReferencePool | None = None,
        now: datetime | None = None,
    ):
        """
        Initialize synthesizer.

        Args:
            rng: Random generator for every non-Faker choice
            faker: Faker instance for corpus-backed values
            pool: Primary keys emitted so far, read for foreign keys
            now: Reference time for relative dates (default: current time)
        """
        self.rng = rng
        self.faker = faker if faker is not None else Faker()
        self.pool = pool if pool is not None else ReferencePool()
        self.now = (now or datetime.now()).replace(microsecond=0)

    @classmethod
    def seeded(
        cls,
        seed: int | None,
        pool: ReferencePool | None = None,
        locale: str = "en_US",
        now: datetime | None = None,
    ) -> "ValueSynthesizer":
        """Build a synthesizer whose random sources are seeded with ``seed``."""
        faker = Faker(locale)
        if seed is not None:
            faker.seed_instance(seed)
        return cls(random.Random(seed), faker=faker, pool=pool, now=now)

    @classmethod
    def supported_types(cls) -> set[S]:
        """Semantic types with a generation rule."""
        return set(FAKER_METHODS) | set(VOCABULARIES) | set(_RULES)

    def synthesize(
        self,
        category: SemanticCategory,
        column: ColumnInfo,
        context: RowContext,
        row_index: int,
    ) -> Any:
        """
        Generate a value for one column of one row.

        Sampled real values are preferred over synthesis for every category
        except primary and foreign keys.

        Args:
            category: The column's semantic category
            column: Column metadata
            context: Values generated earlier in the same row
            row_index: 0-based row index within the table

        Returns:
            The generated value, None for NULL
        """
        kind = category.type
        if column.sample_values and kind not in (S.PRIMARY_KEY, S.FOREIGN_KEY):
            return self.rng.choice(column.sample_values)

        if kind in FAKER_METHODS:
            return getattr(self.faker, FAKER_METHODS[kind])()
        if kind in VOCABULARIES:
            return self.rng.choice(VOCABULARIES[kind])

        rule = _RULES.get(kind)
        if rule is None:
            return None
        return rule(self, category, column, context, row_index)

    # -- identity ---------------------------------------------------------

    def random_uuid(self) -> uuid.UUID:
        """Version 4 UUID drawn from the injected generator."""
        return uuid.UUID(int=self.rng.getrandbits(128), version=4)

    def default_key(self, column: ColumnInfo, row_index: int) -> Any:
        """Sequential integer, or a fresh UUID for UUID columns."""
        if column.data_type == DataType.UUID:
            return self.random_uuid()
        return row_index + 1

    def _primary_key(self, category, column, context, row_index):
        return self.default_key(column, row_index)

    def _foreign_key(self, category, column, context, row_index):
        if category.referenced_table and column.is_primary_key:
            # Keys shared with the parent are taken one-to-one so they stay unique
            keys = self.pool.get(category.referenced_table)
            if row_index < len(keys):
                return keys[row_index]
        elif category.referenced_table:
            value = self.pool.choice(category.referenced_table, self.rng)
            if value is not None:
                return value

        if category.self_reference and column.is_nullable:
            # Root rows of a hierarchy
            return None

        logger.debug(
            f"No keys available in '{category.referenced_table}' for column "
            f"'{column.name}'; using default value"
        )
        return self.default_key(column, row_index)

    def _uuid(self, category, column, context, row_index):
        return self.random_uuid()

    # -- personal ---------------------------------------------------------

    def _full_name(self, category, column, context, row_index):
        first = context.get("first_name")
        last = context.get("last_name")
        if first and last:
            return f"{first} {last}"
        return self.faker.name()

    def _username(self, category, column, context, row_index):
        first = context.get("first_name")
        last = context.get("last_name")
        if first and last:
            return f"{slug(first)}.{slug(last)}"
        return f"user{row_index + 1}"

    def _date_of_birth(self, category, column, context, row_index):
        today = self.now.date()
        return self.faker.date_between_dates(
            date_start=today - timedelta(days=80 * 365),
            date_end=today - timedelta(days=18 * 365),
        )

    def _age(self, category, column, context, row_index):
        return self.rng.randint(18, 80)

    def _product_name(self, category, column, context, row_index):
        return " ".join(
            (
                self.rng.choice(PRODUCT_ADJECTIVES),
                self.rng.choice(PRODUCT_MATERIALS),
                self.rng.choice(PRODUCT_NOUNS),
            )
        )

    # -- contact / web ----------------------------------------------------

    def _email(self, category, column, context, row_index):
        local = context.get("username")
        if not local:
            first = context.get("first_name")
            last = context.get("last_name")
            full = context.get("full_name")
            if first and last:
                local = f"{slug(first)}.{slug(last)}"
            elif full:
                local = ".".join(slug(part) for part in full.split() if slug(part))
        if not local:
            local = self.faker.user_name()

        domain = (
            context.get("domain_name")
            or domain_from_organization(context.get("company_name"))
            or self.rng.choice(EMAIL_PROVIDERS)
        )
        return f"{local.lower()}@{domain}"

    def _domain_name(self, category, column, context, row_index):
        return domain_from_organization(context.get("company_name")) or self.faker.domain_name()

    def _url(self, category, column, context, row_index):
        domain = context.get("domain_name") or domain_from_organization(
            context.get("company_name")
        )
        if domain:
            return f"https://www.{domain}"
        return self.faker.url()

    def _ipv4(self, category, column, context, row_index):
        return self.faker.ipv4_private()

    def _mac(self, category, column, context, row_index):
        return self.faker.mac_address()

    def _port(self, category, column, context, row_index):
        return self.rng.randint(1024, 65535)

    def _latitude(self, category, column, context, row_index):
        return self._fit(column, self.faker.latitude())

    def _longitude(self, category, column, context, row_index):
        return self._fit(column, self.faker.longitude())

    # -- temporal ---------------------------------------------------------

    def _start_date(self, category, column, context, row_index):
        days = self.rng.randint(365, 5 * 365)
        return self._moment(column, self.now - timedelta(days=days, seconds=self._seconds()))

    def _end_date(self, category, column, context, row_index):
        start = context.get_most_recent_start_date()
        if start is None:
            start = self.now - timedelta(days=self.rng.randint(1, 365))
        elif not isinstance(start, datetime):
            start = datetime.combine(start, time())
        end = start + timedelta(days=self.rng.randint(30, 730), seconds=self._seconds())
        return self._moment(column, end)

    def _update_date(self, category, column, context, row_index):
        days = self.rng.randint(1, 90)
        return self._moment(column, self.now - timedelta(days=days, seconds=self._seconds()))

    def _timestamp(self, category, column, context, row_index):
        days = self.rng.randint(0, 730)
        return self._moment(column, self.now - timedelta(days=days, seconds=self._seconds()))

    def _time(self, category, column, context, row_index):
        return self.faker.time_object().replace(microsecond=0)

    def _year(self, category, column, context, row_index):
        return self.rng.randint(self.now.year - 30, self.now.year)

    # -- financial --------------------------------------------------------

    def _money(self, category, column, context, row_index):
        return self._fit(column, self._decimal(self.rng.randint(100, 1_000_000)))

    def _percentage(self, category, column, context, row_index):
        return self._fit(column, self._decimal(self.rng.randint(0, 10_000)))

    # -- cryptographic-looking --------------------------------------------

    def _password_hash(self, category, column, context, row_index):
        return "$2b$12$" + self.faker.lexify("?" * 53, letters=_BCRYPT_ALPHABET)

    def _hash(self, category, column, context, row_index):
        return self.faker.sha256()

    def _token(self, category, column, context, row_index):
        return self.faker.password(length=32, special_chars=False)

    # -- codes, fiction, content ------------------------------------------

    def _identifier_code(self, category, column, context, row_index):
        return self.faker.bothify("???-####-####", letters=string.ascii_uppercase)

    def _fiction_place(self, category, column, context, row_index):
        return f"{self.rng.choice(FICTION_PREFIXES)} {self.rng.choice(FICTION_SUFFIXES)}"

    def _title(self, category, column, context, row_index):
        words = self.rng.randint(3, 8)
        return self.faker.sentence(nb_words=words, variable_nb_words=False).rstrip(".")

    def _description(self, category, column, context, row_index):
        return self.faker.sentence(nb_words=self.rng.randint(8, 20), variable_nb_words=False)

    def _body_text(self, category, column, context, row_index):
        return self.faker.paragraph(
            nb_sentences=self.rng.randint(2, 5), variable_nb_sentences=False
        )

    def _tags(self, category, column, context, row_index):
        words = self.faker.words(nb=self.rng.randint(1, 4))
        if column.data_type == DataType.ARRAY:
            return words
        return ", ".join(words)

    def _file_path(self, category, column, context, row_index):
        return self.faker.file_path(depth=self.rng.randint(1, 3))

    # -- measurement / version --------------------------------------------

    def _quantity(self, category, column, context, row_index):
        return self.rng.randint(1, 500)

    def _weight(self, category, column, context, row_index):
        return self._fit(column, self._decimal(self.rng.randint(10, 50_000)))

    def _dimension(self, category, column, context, row_index):
        return self._fit(column, self._decimal(self.rng.randint(50, 30_000)))

    def _duration(self, category, column, context, row_index):
        return self.rng.randint(1, 480)

    def _capacity(self, category, column, context, row_index):
        return self.rng.randint(1000, 50000)

    def _rating(self, category, column, context, row_index):
        if column.data_type == DataType.INTEGER:
            return self.rng.randint(1, 5)
        return self._fit(column, Decimal(self.rng.randint(10, 50)) / 10)

    def _version(self, category, column, context, row_index):
        if column.data_type.is_numeric:
            return self.rng.randint(1, 20)
        r = self.rng.randint
        return f"{r(0, 9)}.{r(0, 20)}.{r(0, 50)}"

    # -- declared-type fallbacks ------------------------------------------

    def _integer(self, category, column, context, row_index):
        return self.rng.randint(1, 1000)

    def _generic_decimal(self, category, column, context, row_index):
        return self._fit(column, self._decimal(self.rng.randint(0, 999_999)))

    def _boolean(self, category, column, context, row_index):
        return self.rng.random() < 0.5

    def _text(self, category, column, context, row_index):
        return self.faker.word()

    def _json(self, category, column, context, row_index):
        return {"generated": True, "tag": self.faker.word()}

    def _array(self, category, column, context, row_index):
        return [self.faker.word(), self.faker.word()]

    def _unknown(self, category, column, context, row_index):
        return None

    # -- helpers ----------------------------------------------------------

    def _seconds(self) -> int:
        return self.rng.randint(0, 86_399)

    def _decimal(self, cents: int) -> Decimal:
        return Decimal(f"{cents // 100}.{cents % 100:02d}")

    @staticmethod
    def _moment(column: ColumnInfo, value: datetime) -> date | datetime:
        if column.data_type == DataType.DATE:
            return value.date()
        return value.replace(microsecond=0)

    @staticmethod
    def _fit(column: ColumnInfo, value: Decimal) -> int | Decimal:
        """
        Fit a numeric value to the column's declared type.

        Integer columns get the rounded value. Columns with a declared scale get
        the value rounded to that scale, with its whole part wrapped into the
        ``precision - scale`` digits the column can hold.
        """
        if column.data_type == DataType.INTEGER:
            return int(round(value))
        scale = column.numeric_scale
        if scale is None:
            return value
        precision = column.numeric_precision or DEFAULT_PRECISION
        value = Decimal(str(value)).quantize(Decimal(1).scaleb(-scale))
        return value % (10 ** max(precision - scale, 0))


_RULES = {
    S.PRIMARY_KEY: ValueSynthesizer._primary_key,
    S.FOREIGN_KEY: ValueSynthesizer._foreign_key,
    S.UUID: ValueSynthesizer._uuid,
    S.FULL_NAME: ValueSynthesizer._full_name,
    S.USERNAME: ValueSynthesizer._username,
    S.DATE_OF_BIRTH: ValueSynthesizer._date_of_birth,
    S.AGE: ValueSynthesizer._age,
    S.PRODUCT_NAME: ValueSynthesizer._product_name,
    S.EMAIL: ValueSynthesizer._email,
    S.DOMAIN_NAME: ValueSynthesizer._domain_name,
    S.URL: ValueSynthesizer._url,
    S.IPV4_ADDRESS: ValueSynthesizer._ipv4,
    S.MAC_ADDRESS: ValueSynthesizer._mac,
    S.PORT: ValueSynthesizer._port,
    S.LATITUDE: ValueSynthesizer._latitude,
    S.LONGITUDE: ValueSynthesizer._longitude,
    S.START_DATE: ValueSynthesizer._start_date,
    S.END_DATE: ValueSynthesizer._end_date,
    S.UPDATE_DATE: ValueSynthesizer._update_date,
    S.TIMESTAMP: ValueSynthesizer._timestamp,
    S.TIME: ValueSynthesizer._time,
    S.YEAR: ValueSynthesizer._year,
    S.MONEY: ValueSynthesizer._money,
    S.PERCENTAGE: ValueSynthesizer._percentage,
    S.PASSWORD_HASH: ValueSynthesizer._password_hash,
    S.HASH: ValueSynthesizer._hash,
    S.TOKEN: ValueSynthesizer._token,
    S.IDENTIFIER_CODE: ValueSynthesizer._identifier_code,
    S.FICTION_PLACE: ValueSynthesizer._fiction_place,
    S.TITLE: ValueSynthesizer._title,
    S.DESCRIPTION: ValueSynthesizer._description,
    S.BODY_TEXT: ValueSynthesizer._body_text,
    S.TAGS: ValueSynthesizer._tags,
    S.FILE_PATH: ValueSynthesizer._file_path,
    S.QUANTITY: ValueSynthesizer._quantity,
    S.WEIGHT: ValueSynthesizer._weight,
    S.DIMENSION: ValueSynthesizer._dimension,
    S.DURATION: ValueSynthesizer._duration,
    S.CAPACITY: ValueSynthesizer._capacity,
    S.RATING: ValueSynthesizer._rating,
    S.VERSION: ValueSynthesizer._version,
    S.INTEGER: ValueSynthesizer._integer,
    S.DECIMAL: ValueSynthesizer._generic_decimal,
    S.BOOLEAN: ValueSynthesizer._boolean,
    S.TEXT: ValueSynthesizer._text,
    S.JSON: ValueSynthesizer._json,
    S.ARRAY: ValueSynthesizer._array,
    S.UNKNOWN: ValueSynthesizer._unknown,
}

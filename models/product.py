from dataclasses import dataclass
from datetime import datetime, timezone
import math

from app.core.exceptions import InvalidProductError

AVAILABILITY_VALUES = ("InStock", "OutOfStock", "PreOrder")
DEFAULT_AVAILABILITY = "InStock"
DEFAULT_CURRENCY = "BDT"
RATING_MIN = 0.0
RATING_MAX = 5.0


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    slug: str

    @classmethod
    def from_dict(cls, data):
        if isinstance(data, Category):
            return data
        if not isinstance(data, dict):
            # An unpopulated reference only carries the id
            return cls(id=str(data), name="", slug="")

        category_id = data.get("_id", data.get("id"))
        if category_id is None:
            raise InvalidProductError("Category without id", details=data)

        return cls(
            id=str(category_id),
            name=" ".join(str(data.get("name") or "").split()),
            slug=str(data.get("slug") or "").strip(),
        )


@dataclass(frozen=True)
class Price:
    currency: str
    amount: float


@dataclass(frozen=True)
class AggregateRating:
    value: float
    review_count: int


@dataclass(frozen=True)
class Specification:
    name: str
    value: str


@dataclass(frozen=True)
class FAQ:
    question: str
    answer: str


def _clean_text(value):
    if not value:
        return ""
    return " ".join(str(value).split())


class Product:
    """
    A catalog product as the search engine sees it.

    Every product has an id and a non-empty title. List fields are always
    lists (possibly empty) and string fields are whitespace-collapsed. The
    search engine only reads products, it never changes them.
    """
    def __init__(self, id, title, slug=None, main_image=None, main_image_alt=None,
                 description=None, short_description=None, product_code=None, brand=None,
                 category=None, prices=None, quantity=None, availability=None,
                 aggregate_rating=None, is_global=None, target_country=None, target_city=None,
                 keywords=None, sizes=None, specifications=None, faqs=None, created_at=None):
        self.id = Product.normalize_id(id)
        self.title = Product.normalize_title(title)
        self.slug = _clean_text(slug)
        self.main_image = _clean_text(main_image)
        self.main_image_alt = _clean_text(main_image_alt)
        self.description = _clean_text(description)
        self.short_description = _clean_text(short_description) or None
        self.product_code = _clean_text(product_code)
        self.brand = _clean_text(brand)
        self.category = Product.normalize_category(category)
        self.prices = Product.normalize_prices(prices)
        self.quantity = Product.normalize_quantity(quantity)
        self.availability = Product.normalize_availability(availability)
        self.aggregate_rating = Product.normalize_rating(aggregate_rating)
        self.is_global = bool(is_global)
        self.target_country = _clean_text(target_country) or None
        self.target_city = _clean_text(target_city) or None
        self.keywords = Product.normalize_keywords(keywords)
        self.sizes = Product.normalize_sizes(sizes)
        self.specifications = Product.normalize_specifications(specifications)
        self.faqs = Product.normalize_faqs(faqs)
        self.created_at = Product.normalize_created_at(created_at)

    def __repr__(self):
        return f"Product(id={self.id!r}, title={self.title!r})"

    @staticmethod
    def normalize_id(id):
        if id is None or isinstance(id, bool):
            raise InvalidProductError("Missing product id")

        if isinstance(id, dict) and "$oid" in id:
            id = id["$oid"]

        id = str(id).strip()
        if not id:
            raise InvalidProductError("Missing product id")
        return id

    @staticmethod
    def normalize_title(title):
        if not title or not isinstance(title, str):
            raise InvalidProductError("Missing product title")

        title = " ".join(title.split())
        if not title:
            raise InvalidProductError("Missing product title")
        return title

    @staticmethod
    def normalize_category(category):
        if category is None or category == "":
            return None
        return Category.from_dict(category)

    @staticmethod
    def normalize_prices(prices):
        if prices is None:
            return []

        if not isinstance(prices, list):
            raise InvalidProductError("prices is not a list", details=prices)

        normalized = []
        for entry in prices:
            if isinstance(entry, Price):
                normalized.append(entry)
                continue
            if not isinstance(entry, dict):
                raise InvalidProductError("price entry is not an object", details=entry)

            currency = str(entry.get("currency") or "").strip().upper()
            if not currency:
                raise InvalidProductError("price entry without currency", details=entry)

            try:
                amount = float(entry.get("amount"))
            except (TypeError, ValueError):
                raise InvalidProductError("price amount is not a number", details=entry)
            if math.isnan(amount) or amount < 0:
                raise InvalidProductError("price amount out of bounds", details=entry)

            normalized.append(Price(currency=currency, amount=amount))
        return normalized

    @staticmethod
    def normalize_quantity(quantity):
        if quantity is None or quantity == "":
            return 0

        try:
            quantity = int(quantity)
        except (TypeError, ValueError, OverflowError):
            raise InvalidProductError("quantity is not an integer", details=quantity)

        if quantity < 0:
            raise InvalidProductError("quantity is negative", details=quantity)
        return quantity

    @staticmethod
    def normalize_availability(availability):
        if not availability:
            return DEFAULT_AVAILABILITY

        if availability not in AVAILABILITY_VALUES:
            raise InvalidProductError("unknown availability", details=availability)
        return availability

    @staticmethod
    def normalize_rating(rating):
        if rating is None:
            return None
        if isinstance(rating, AggregateRating):
            return rating
        if not isinstance(rating, dict):
            raise InvalidProductError("aggregateRating is not an object", details=rating)

        raw_value = rating.get("ratingValue")
        raw_count = rating.get("reviewCount")
        try:
            value = float(raw_value) if raw_value is not None else 0.0
            review_count = int(raw_count) if raw_count is not None else 0
        except (TypeError, ValueError, OverflowError):
            raise InvalidProductError("aggregateRating is not numeric", details=rating)

        if not RATING_MIN <= value <= RATING_MAX:
            raise InvalidProductError("rating out of bounds", details=rating)
        return AggregateRating(value=value, review_count=max(review_count, 0))

    @staticmethod
    def normalize_keywords(keywords):
        if keywords is None:
            return []

        if not isinstance(keywords, (str, list)):
            raise InvalidProductError("keywords is not None, string or list", details=keywords)

        if isinstance(keywords, str):
            keywords = keywords.split(",")

        for keyword in keywords:
            if not isinstance(keyword, str):
                raise InvalidProductError("found non-string keyword", details=keyword)

        cleaned = [" ".join(k.split()) for k in keywords]
        return list(dict.fromkeys(k for k in cleaned if k))

    @staticmethod
    def normalize_sizes(sizes):
        if sizes is None:
            return []
        if not isinstance(sizes, list):
            raise InvalidProductError("sizes is not a list", details=sizes)

        names = []
        for size in sizes:
            name = size.get("name") if isinstance(size, dict) else size
            name = _clean_text(name)
            if name:
                names.append(name)
        return names

    @staticmethod
    def normalize_specifications(specifications):
        if specifications is None:
            return []
        if not isinstance(specifications, list):
            raise InvalidProductError("specifications is not a list", details=specifications)

        return [
            Specification(name=_clean_text(s.get("name")), value=_clean_text(s.get("value")))
            for s in specifications
            if isinstance(s, dict)
        ]

    @staticmethod
    def normalize_faqs(faqs):
        if faqs is None:
            return []
        if not isinstance(faqs, list):
            raise InvalidProductError("faqs is not a list", details=faqs)

        return [
            FAQ(question=_clean_text(f.get("question")), answer=_clean_text(f.get("answer")))
            for f in faqs
            if isinstance(f, dict)
        ]

    @staticmethod
    def normalize_created_at(created_at):
        if created_at is None or created_at == "":
            return None

        if isinstance(created_at, dict) and "$date" in created_at:
            created_at = created_at["$date"]

        if isinstance(created_at, (int, float)) and not isinstance(created_at, bool):
            # epoch milliseconds, the document store's native unit
            try:
                created_at = datetime.fromtimestamp(created_at / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                raise InvalidProductError("createdAt epoch out of range", details=created_at)
        elif isinstance(created_at, str):
            try:
                created_at = datetime.fromisoformat(created_at.strip().replace("Z", "+00:00"))
            except ValueError:
                raise InvalidProductError("createdAt is not an ISO timestamp", details=created_at)

        if not isinstance(created_at, datetime):
            raise InvalidProductError("createdAt is not a timestamp", details=created_at)

        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at

    def price_in(self, currency=DEFAULT_CURRENCY):
        for price in self.prices:
            if price.currency == currency:
                return price.amount
        return None

    @property
    def bdt_price(self):
        return self.price_in(DEFAULT_CURRENCY) or 0.0

    @property
    def rating_value(self):
        return self.aggregate_rating.value if self.aggregate_rating else 0.0

    @classmethod
    def from_dict(cls, data):
        return cls(id=data.get("_id", data.get("id")),
                   title=data.get("title"),
                   slug=data.get("slug"),
                   main_image=data.get("mainImage"),
                   main_image_alt=data.get("mainImageAlt"),
                   description=data.get("description"),
                   short_description=data.get("shortDescription"),
                   product_code=data.get("product_code", data.get("productCode")),
                   brand=data.get("brand"),
                   category=data.get("category"),
                   prices=data.get("prices"),
                   quantity=data.get("quantity"),
                   availability=data.get("availability"),
                   aggregate_rating=data.get("aggregateRating"),
                   is_global=data.get("isGlobal"),
                   target_country=data.get("targetCountry"),
                   target_city=data.get("targetCity"),
                   keywords=data.get("keywords"),
                   sizes=data.get("sizes"),
                   specifications=data.get("specifications"),
                   faqs=data.get("faqs"),
                   created_at=data.get("createdAt"))

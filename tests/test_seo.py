import pytest

from landing_pages.core.errors import InvalidDomainError, InvalidInputError
from landing_pages.render import seo


@pytest.mark.parametrize(
    "raw",
    ["example.com", "https://example.com", "http://www.example.com/", "  HTTPS://WWW.Example.com/ "],
)
def test_clean_domain_normalizes(raw):
    assert seo.clean_domain(raw) == "example.com"


@pytest.mark.parametrize("domain", ["example.com", "www.my-site.co.uk", "https://shop.example.org"])
def test_is_valid_domain_accepts(domain):
    assert seo.is_valid_domain(domain)


@pytest.mark.parametrize("domain", ["", "not a domain", "http://", "a..b.com", "-bad.com", "example", "example.c"])
def test_is_valid_domain_rejects(domain):
    assert not seo.is_valid_domain(domain)


def test_slugify_collapses_separators():
    assert seo.slugify("Widget & Gadget  Rental!") == "widget-gadget-rental"
    assert seo.slugify("  St. Louis ") == "st-louis"
    assert seo.slugify("---") == ""


def test_generate_seo_url():
    url = seo.generate_seo_url("https://www.Example.com/", "Widget Rental", "Round Rock", "TX")
    assert url == "example.com/locations/round-rock-tx/widget-rental"
    assert url == seo.generate_seo_url("https://www.Example.com/", "Widget Rental", "Round Rock", "TX")


@pytest.mark.parametrize("domain", ["not a domain", "http://", "a..b.com"])
def test_generate_seo_url_rejects_invalid_domain(domain):
    with pytest.raises(InvalidDomainError):
        seo.generate_seo_url(domain, "Widget Rental", "Austin", "TX")


def test_invalid_domain_is_an_input_error():
    assert issubclass(InvalidDomainError, InvalidInputError)
    assert issubclass(InvalidDomainError, ValueError)


def test_generate_meta_title():
    assert seo.generate_meta_title("Widget Rental", "Austin", "TX") == "Widget Rental in Austin, TX | Professional Services"
    assert seo.generate_meta_title("Widget Rental", "Austin", "TX", suffix="Acme") == "Widget Rental in Austin, TX | Acme"


def test_meta_description_truncates_long_text():
    description = "x" * 200
    result = seo.generate_meta_description(description)
    assert len(result) == 155
    assert result.endswith("...")
    assert result[:152] == "x" * 152


def test_meta_description_keeps_short_text():
    exact = "y" * 155
    assert seo.generate_meta_description(exact) == exact
    assert seo.generate_meta_description("Short.") == "Short."


def test_extract_keywords_orders_and_dedupes():
    keywords = seo.extract_keywords(
        "Widget Rental",
        "Austin",
        "TX",
        services="Widget Delivery\n\nWidget Rental\nSetup Help",
        extra=("widgets austin",),
    )

    assert keywords == [
        "Widget Rental",
        "Widget Rental Austin",
        "Widget Rental TX",
        "Widget Rental near me",
        "widgets austin",
        "Widget Delivery",
        "Setup Help",
    ]

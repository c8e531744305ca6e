import json
from types import SimpleNamespace

import openai
import pytest

from landing_pages.models import SeoMetadata
from landing_pages.vendors import openai_content
from landing_pages.vendors.site_snapshot import SiteSnapshot


class FakeCompletions:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


def _composer(*replies, snapshot=None):
    completions = FakeCompletions(replies)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    composer = openai_content.ContentComposer(client=client, model="gpt-test", snapshotter=lambda url: snapshot)
    return composer, completions


def test_generate_business_content_parses_json():
    body = {
        "description": "Acme rents widgets.",
        "services": ["Widget Rental", " Widget Delivery ", ""],
        "targetAudience": "Homeowners",
        "uniqueValue": "Fast",
        "coreValues": "Speed\nCare",
        "keyword": "Widget Rental",
        "suggestedLocations": [{"city": "Austin", "state": "TX"}, {"city": "Nowhere"}],
    }
    composer, completions = _composer(json.dumps(body))

    content = composer.generate_business_content("example.com")

    assert content.from_fallback is False
    assert content.keyword == "Widget Rental"
    assert content.business.service_lines() == ["Widget Rental", "Widget Delivery"]
    assert content.suggested_locations == (("Austin", "TX"),)
    call = completions.calls[0]
    assert call["model"] == "gpt-test"
    assert call["messages"][0]["role"] == "system"
    assert "example.com" in call["messages"][1]["content"]


def test_missing_fields_are_filled_from_defaults():
    composer, _ = _composer(json.dumps({"description": "Only a description"}))

    content = composer.generate_business_content("example.com")

    assert content.business.description == "Only a description"
    assert content.business.services == openai_content.DEFAULT_BUSINESS.services
    assert content.keyword == openai_content.DEFAULT_KEYWORD
    assert content.suggested_locations == openai_content.DEFAULT_SUGGESTED_LOCATIONS


@pytest.mark.parametrize(
    "reply",
    [openai.OpenAIError("boom"), "not json", json.dumps(["a", "list"])],
)
def test_generate_business_content_falls_back(reply):
    composer, _ = _composer(reply)
    assert composer.generate_business_content("example.com") is openai_content.DEFAULT_CONTENT


def test_unconfigured_composer_uses_defaults():
    composer = openai_content.ContentComposer(None, snapshotter=None)
    content = composer.generate_business_content("example.com")
    assert content.from_fallback is True
    assert content.business == openai_content.DEFAULT_BUSINESS


def test_snapshot_is_added_to_prompt():
    snapshot = SiteSnapshot(url="https://example.com/", title="Acme Widgets", summary="We rent widgets.")
    composer, completions = _composer(json.dumps({}), snapshot=snapshot)

    composer.generate_business_content("example.com")

    prompt = completions.calls[0]["messages"][1]["content"]
    assert "Title: Acme Widgets" in prompt
    assert "Visible text: We rent widgets." in prompt


def test_snapshot_failure_does_not_block_generation():
    def broken(url):
        raise RuntimeError("dns failure")

    completions = FakeCompletions([json.dumps({"keyword": "Widgets"})])
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    composer = openai_content.ContentComposer(client=client, snapshotter=broken)

    assert composer.generate_business_content("example.com").keyword == "Widgets"


def test_generate_seo_metadata():
    composer, _ = _composer(
        json.dumps({"metaTitle": "Widgets in Austin", "metaDescription": "Rent widgets", "keywords": ["a", "b"]}),
        openai.OpenAIError("down"),
    )

    metadata = composer.generate_seo_metadata("Title", "Description")
    assert metadata.meta_title == "Widgets in Austin"
    assert metadata.keywords == ("a", "b")

    fallback = composer.generate_seo_metadata("Title", "d" * 200)
    assert fallback.meta_title == "Title"
    assert len(fallback.meta_description) == 155
    assert fallback.keywords == openai_content.DEFAULT_SEO_KEYWORDS


def test_format_city_name_and_validate_location():
    composer, _ = _composer(
        json.dumps({"city": "Saint Louis", "state": "MO"}),
        openai.OpenAIError("down"),
        "false",
        "not json",
    )

    assert composer.format_city_name("st louis", "mo") == ("Saint Louis", "MO")
    assert composer.format_city_name("st louis", "mo") == ("st louis", "mo")
    assert composer.validate_location("Springfield", "ZZ") is False
    assert composer.validate_location("Springfield", "IL") is True


def test_seo_metadata_uses_caller_fallback_and_cuts_description():
    fallback = SeoMetadata(meta_title="Local title", meta_description="Local description", keywords=("widgets",))
    composer, _ = _composer(json.dumps({"metaDescription": "z" * 300}), "[]")

    metadata = composer.generate_seo_metadata("Title", "Description", fallback=fallback)
    assert metadata.meta_title == "Local title"
    assert len(metadata.meta_description) == 155
    assert metadata.keywords == ("widgets",)

    assert composer.generate_seo_metadata("Title", "Description", fallback=fallback) is fallback


def test_unconfigured_helpers_skip_the_provider(caplog):
    composer = openai_content.ContentComposer(None, snapshotter=None)
    fallback = SeoMetadata(meta_title="t", meta_description="d")

    with caplog.at_level("WARNING"):
        assert composer.format_city_name("st louis", "mo") == ("st louis", "mo")
        assert composer.validate_location("Springfield", "ZZ") is True
        assert composer.generate_seo_metadata("Title", "Description", fallback=fallback) is fallback

    assert composer.configured is False
    assert caplog.records == []

import pytest
from pydantic import ValidationError

from tests.conftest import FIXED_NOW
from veille.config import DEFAULT_CATALOG, KeywordCatalog, LanguageGroup, locale_for
from veille.ingestion import UNKNOWN_SOURCE, Article, RawSearchResult, RawSource, normalize_source


class TestNormalizeSource:
    def test_plain_string(self):
        assert normalize_source("Le360") == "Le360"

    def test_object_with_title(self):
        assert normalize_source(RawSource(title="Hespress")) == "Hespress"

    def test_absent(self):
        assert normalize_source(None) == UNKNOWN_SOURCE == "Unknown"

    def test_object_without_title(self):
        assert normalize_source(RawSource()) == "Unknown"

    def test_blank_string(self):
        assert normalize_source("") == "Unknown"
        assert normalize_source("   ") == "Unknown"


class TestRawSearchResult:
    def test_source_dict_becomes_object(self):
        raw = RawSearchResult.model_validate({"link": "https://a", "source": {"title": "Le Matin", "icon": "x"}})
        assert isinstance(raw.source, RawSource)
        assert raw.source.title == "Le Matin"

    def test_nulls_become_empty_strings(self):
        raw = RawSearchResult.model_validate({"link": "https://a", "title": None, "snippet": None, "date": None})
        assert raw.title == ""
        assert raw.snippet == ""
        assert raw.date == ""

    @pytest.mark.parametrize("value", [42, ["Le360"], True, 3.5])
    def test_other_source_shapes_become_absent(self, value):
        raw = RawSearchResult.model_validate({"link": "https://a", "source": value})
        assert raw.source is None
        assert normalize_source(raw.source) == "Unknown"

    def test_non_string_source_title_ignored(self):
        raw = RawSearchResult.model_validate({"link": "https://a", "source": {"title": 7}})
        assert normalize_source(raw.source) == "Unknown"

    def test_extra_fields_ignored(self):
        raw = RawSearchResult.model_validate({"link": "https://a", "position": 3, "thumbnail": "t.png"})
        assert raw.link == "https://a"


class TestArticleFromRaw:
    def test_fields_pass_through(self):
        raw = RawSearchResult(
            title="Frégate Mohammed VI",
            link="https://le360.ma/fregate",
            snippet="La frégate a appareillé",
            date="2 hours ago",
            source="Le360",
        )
        article = Article.from_raw(raw, FIXED_NOW)
        assert article.title == "Frégate Mohammed VI"
        assert article.link == "https://le360.ma/fregate"
        assert article.snippet == "La frégate a appareillé"
        assert article.date == "2 hours ago"
        assert article.source == "Le360"

    def test_created_at_is_ingestion_time(self):
        raw = RawSearchResult(link="https://a", date="Jan 3, 2020")
        article = Article.from_raw(raw, FIXED_NOW)
        assert article.created_at == FIXED_NOW


class TestCatalog:
    def test_default_order_and_sizes(self):
        assert DEFAULT_CATALOG.tags == ["arabic", "french", "spanish"]
        assert [len(g.keywords) for g in DEFAULT_CATALOG.groups] == [6, 7, 7]
        assert DEFAULT_CATALOG.total_keywords == 20

    def test_iter_keywords_preserves_order(self):
        pairs = list(DEFAULT_CATALOG.iter_keywords())
        assert pairs[0][0] == "البحرية الملكية"
        assert pairs[6][0] == "La Marine royale"
        assert pairs[-1][0] == "fragata marroquí"
        assert pairs[-1][1].tag == "spanish"

    @pytest.mark.parametrize(
        "tag, locale",
        [("arabic", "ar"), ("french", "fr"), ("spanish", "es"), ("english", "es")],
    )
    def test_locale_mapping(self, tag, locale):
        assert locale_for(tag) == locale

    def test_group_locale(self):
        assert DEFAULT_CATALOG.groups[0].locale == "ar"

    def test_empty_group_rejected(self):
        with pytest.raises(ValidationError):
            LanguageGroup(tag="french", keywords=())

    def test_blank_keyword_rejected(self):
        with pytest.raises(ValidationError):
            LanguageGroup(tag="french", keywords=("Marine", "  "))

    def test_duplicate_tags_rejected(self):
        group = LanguageGroup(tag="french", keywords=("Marine",))
        with pytest.raises(ValidationError):
            KeywordCatalog(groups=(group, group))

    def test_catalog_is_immutable(self):
        with pytest.raises(ValidationError):
            DEFAULT_CATALOG.groups = ()

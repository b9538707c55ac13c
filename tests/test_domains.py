"""
Unit tests for company name -> domain / Wikipedia title normalization.
"""

import pytest

from domains import (
    KNOWN_DOMAINS,
    company_to_domain,
    company_to_wiki_title,
    resolve_identity,
)


class TestCompanyToDomain:
    """Tests for company_to_domain function."""

    @pytest.mark.parametrize("name", sorted(KNOWN_DOMAINS))
    def test_every_known_entry(self, name):
        assert company_to_domain(name) == KNOWN_DOMAINS[name]

    def test_known_entry_ignores_case_and_whitespace(self):
        assert company_to_domain(" Apple ") == "apple.com"
        assert company_to_domain("MCDONALD'S") == "mcdonalds.com"
        assert company_to_domain("  Booz Allen Hamilton") == "boozallen.com"

    def test_irregular_known_domains(self):
        assert company_to_domain("X") == "x.com"
        assert company_to_domain("Zoom") == "zoom.us"
        assert company_to_domain("AWS") == "aws.amazon.com"

    def test_dotted_input_returned_lowercased(self):
        assert company_to_domain("Example.IO") == "example.io"
        assert company_to_domain("  shop.example.co.uk ") == "shop.example.co.uk"

    def test_table_wins_over_dot_rule(self):
        # no dot in the key, table hit
        assert company_to_domain("google cloud") == "cloud.google.com"

    def test_unknown_single_word(self):
        assert company_to_domain("Acme!!") == "acme.com"

    def test_unknown_multi_word_and_hyphens(self):
        assert company_to_domain("Totally-Unknown XYZ Corp") == "totallyunknownxyzcorp.com"
        assert company_to_domain("totally-unknown-xyz-corp") == "totallyunknownxyzcorp.com"

    def test_non_ascii_stripped(self):
        assert company_to_domain("Café Nero") == "cafnero.com"


class TestCompanyToWikiTitle:
    """Tests for company_to_wiki_title function."""

    def test_known_title(self):
        assert company_to_wiki_title("Apple") == "Apple_Inc."
        assert company_to_wiki_title(" mckinsey & company ") == "McKinsey_&_Company"

    def test_heuristic_capitalizes_each_word(self):
        assert company_to_wiki_title("bank of america") == "Bank_Of_America"

    def test_heuristic_keeps_rest_of_word(self):
        assert company_to_wiki_title("eBay") == "EBay"
        assert company_to_wiki_title("  Roland Berger ") == "Roland_Berger"


class TestResolveIdentity:
    def test_fields(self):
        identity = resolve_identity("Nike")
        assert identity.company == "Nike"
        assert identity.domain == "nike.com"
        assert identity.wiki_title == "Nike"

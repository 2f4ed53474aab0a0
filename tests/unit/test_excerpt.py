import pytest

from case7.core.services.excerpt import create_excerpt, split_sentences


class TestSplitSentences:
    """Unit tests for sentence splitting."""

    @pytest.mark.unit
    def test_splits_on_terminal_punctuation(self):
        assert split_sentences("One. Two! Three? Four") == ["One", "Two", "Three", "Four"]

    @pytest.mark.unit
    def test_drops_empty_fragments(self):
        """Runs of punctuation and trailing whitespace yield no empty sentences."""
        assert split_sentences("Wait...   Really?!  \n") == ["Wait", "Really"]


class TestCreateExcerpt:
    """Unit tests for the excerpt extractor."""

    @pytest.mark.unit
    def test_picks_sentence_with_most_terms(self):
        content = "Install the SDK. Configure Stripe webhooks for checkout. Deploy."
        assert create_excerpt(content, "stripe checkout") == "Configure Stripe webhooks for checkout"

    @pytest.mark.unit
    def test_tie_keeps_earliest_sentence(self):
        content = "Stripe is first. Stripe is second."
        assert create_excerpt(content, "stripe") == "Stripe is first"

    @pytest.mark.unit
    def test_no_match_defaults_to_first_sentence(self):
        assert create_excerpt("Alpha. Beta.", "gamma") == "Alpha"

    @pytest.mark.unit
    def test_empty_content_yields_empty_string(self):
        assert create_excerpt("", "anything") == ""
        assert create_excerpt("  ...  ", "anything") == ""

    @pytest.mark.unit
    def test_short_terms_count(self):
        """Unlike keyword scoring, excerpts match terms of any length."""
        content = "Payments are hard. It is fast."
        assert create_excerpt(content, "is") == "It is fast"

    @pytest.mark.unit
    def test_repeated_query_terms_count_once(self):
        content = "Stripe only. Checkout and PayPal."
        assert create_excerpt(content, "stripe stripe checkout paypal") == "Checkout and PayPal"

    @pytest.mark.unit
    def test_long_sentence_is_truncated_with_ellipsis(self):
        sentence = "word " * 60
        excerpt = create_excerpt(sentence, "word")

        assert len(excerpt) == 200
        assert excerpt.endswith("...")
        assert excerpt[:-3] == sentence.strip()[:197]

    @pytest.mark.unit
    def test_sentence_within_limit_is_unchanged(self):
        sentence = "x" * 200
        assert create_excerpt(sentence, "x") == sentence

    @pytest.mark.unit
    @pytest.mark.parametrize("max_length", [1, 3, 4, 10, 50, 200])
    def test_length_never_exceeds_max_length(self, max_length):
        content = "A fairly long sentence about Stripe checkout sessions and webhooks. Short."
        assert len(create_excerpt(content, "stripe", max_length=max_length)) <= max_length

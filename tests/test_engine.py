"""Unit tests for the deterministic engine components."""

from __future__ import annotations

import random

from engine.claim_extractor import candidates_from_payload, has_candidates
from engine.claim_validator import parse_verdict, validate_claims
from engine.fallback import generic_claims, sentence_claims
from engine.feed_normalizer import normalize_entry
from engine.json_extract import extract_json
from engine.trust import placeholder_trust_score
from schemas.response import Verdict


# ── Feed normalizer ────────────────────────────────────────────────────

class TestFeedNormalizer:
    def test_full_entry(self):
        entry = {
            "title": "Rates unchanged",
            "link": "https://example.com/a",
            "contentSnippet": "The bank held rates.",
        }
        record = normalize_entry(entry, "  Example News  ", score_trust=lambda: 55)
        assert record is not None
        assert record.url == "https://example.com/a"
        assert record.headline == "Rates unchanged"
        assert record.outlet == "Example News"
        assert record.ai_summary == "The bank held rates."
        assert record.trust_score == 55
        assert record.publish_ok is True

    def test_guid_used_when_link_missing(self):
        record = normalize_entry({"guid": "urn:item:1"}, "Feed")
        assert record is not None
        assert record.url == "urn:item:1"

    def test_feedparser_id_used_as_guid(self):
        record = normalize_entry({"id": "tag:example.com,2024:1"}, "Feed")
        assert record is not None
        assert record.url == "tag:example.com,2024:1"

    def test_rejected_without_link_or_guid(self):
        assert normalize_entry({"title": "Orphan"}, "Feed") is None
        assert normalize_entry({"link": "  ", "guid": ""}, "Feed") is None

    def test_defaults(self):
        record = normalize_entry({"link": "https://example.com/b"}, None)
        assert record.headline == "(no title)"
        assert record.outlet == "unknown"
        assert record.ai_summary is None

    def test_summary_truncated_to_600(self):
        record = normalize_entry({"link": "https://example.com/c", "contentSnippet": "x" * 1000}, "Feed")
        assert len(record.ai_summary) == 600

    def test_content_used_when_snippet_missing(self):
        record = normalize_entry({"link": "https://example.com/d", "content": "Body text."}, "Feed")
        assert record.ai_summary == "Body text."

    def test_feedparser_content_parts(self):
        entry = {"link": "https://example.com/e", "content": [{"type": "text/html", "value": "Part one."}]}
        record = normalize_entry(entry, "Feed")
        assert record.ai_summary == "Part one."

    def test_feedparser_summary_preferred_over_content(self):
        entry = {"link": "https://example.com/f", "summary": "Short.", "content": [{"value": "Long body."}]}
        assert normalize_entry(entry, "Feed").ai_summary == "Short."

    def test_html_description_is_stripped(self):
        entry = {"link": "https://example.com/g", "summary": "<p>The budget <b>passed</b>. Taxes rise.</p>"}
        record = normalize_entry(entry, "Feed")
        assert record.ai_summary == "The budget passed. Taxes rise."
        assert [c["claim_text"] for c in sentence_claims(record.ai_summary)] == ["The budget passed", "Taxes rise."]

    def test_markup_does_not_use_summary_budget(self):
        body = "<div>" + "<span class=\"x\">word</span> " * 200 + "</div>"
        record = normalize_entry({"link": "https://example.com/h", "content": [{"value": body}]}, "Feed")
        assert "<" not in record.ai_summary
        assert record.ai_summary.startswith("word word")
        assert len(record.ai_summary) == 600

    def test_entities_decoded(self):
        record = normalize_entry({"link": "https://example.com/i", "summary": "Tom &amp; Jerry"}, "Feed")
        assert record.ai_summary == "Tom & Jerry"


class TestTrustScore:
    def test_always_in_range(self):
        rng = random.Random(7)
        scores = {placeholder_trust_score(rng) for _ in range(2000)}
        assert min(scores) >= 40
        assert max(scores) <= 80

    def test_bounds_reachable(self):
        rng = random.Random(1)
        scores = {placeholder_trust_score(rng) for _ in range(5000)}
        assert 40 in scores
        assert 80 in scores


# ── Claim validator ────────────────────────────────────────────────────

class TestClaimValidator:
    def test_unknown_verdict_coerced(self):
        out = validate_claims([{"claim_text": "A", "verdict": "TRUE"}])
        assert out[0].verdict == Verdict.UNVERIFIABLE

    def test_missing_verdict_coerced(self):
        out = validate_claims([{"claim_text": "A"}])
        assert out[0].verdict == Verdict.UNVERIFIABLE

    def test_verdict_lowercased(self):
        out = validate_claims([{"claim_text": "A", "verdict": "Not_Supported"}])
        assert out[0].verdict == Verdict.NOT_SUPPORTED

    def test_text_truncated_to_300(self):
        out = validate_claims([{"claim_text": "y" * 500}])
        assert len(out[0].claim_text) == 300

    def test_empty_text_dropped(self):
        out = validate_claims([{"claim_text": ""}, {"claim_text": "   "}, {"verdict": "supported"}, {"claim_text": "Kept"}])
        assert [c.claim_text for c in out] == ["Kept"]

    def test_alternate_field_names(self):
        out = validate_claims([{"text": "Alt", "verdict": "partial", "evidence": "https://src.example"}])
        assert out[0].claim_text == "Alt"
        assert out[0].verdict == Verdict.PARTIAL
        assert out[0].evidence_url == "https://src.example"

    def test_evidence_capped_and_defaulted(self):
        out = validate_claims([{"claim_text": "A", "evidence_url": "e" * 1000}, {"claim_text": "B"}])
        assert len(out[0].evidence_url) == 400
        assert out[1].evidence_url == ""

    def test_caps_at_three_in_order(self):
        out = validate_claims([{"claim_text": f"Claim {i}"} for i in range(6)])
        assert [c.claim_text for c in out] == ["Claim 0", "Claim 1", "Claim 2"]

    def test_duplicates_dropped(self):
        out = validate_claims([{"claim_text": "Same"}, {"claim_text": "same "}, {"claim_text": "Other"}])
        assert [c.claim_text for c in out] == ["Same", "Other"]

    def test_non_mapping_candidates_ignored(self):
        out = validate_claims(["just a string", None, 3, {"claim_text": "Real"}])
        assert [c.claim_text for c in out] == ["Real"]

    def test_non_string_text_coerced(self):
        out = validate_claims([{"claim_text": 42}])
        assert out[0].claim_text == "42"

    def test_falsy_non_string_text_dropped(self):
        out = validate_claims([{"claim_text": 0}, {"claim_text": False}, {"text": 0, "claim_text": False}, {"claim_text": "Kept"}])
        assert [c.claim_text for c in out] == ["Kept"]

    def test_falsy_evidence_is_empty(self):
        out = validate_claims([{"claim_text": "A", "evidence_url": 0}])
        assert out[0].evidence_url == ""

    def test_parse_verdict_all_values(self):
        for v in Verdict:
            assert parse_verdict(v.value.upper()) == v


# ── Fallback generator ─────────────────────────────────────────────────

class TestFallback:
    def test_splits_on_sentence_punctuation(self):
        out = sentence_claims("Prices rose. Did wages follow? Unions say no! Extra sentence.")
        assert [c["claim_text"] for c in out] == ["Prices rose", "Did wages follow", "Unions say no"]
        assert all(c["verdict"] == "unverifiable" for c in out)
        assert all(c["evidence_url"] == "" for c in out)

    def test_no_split_without_whitespace(self):
        out = sentence_claims("Version 2.5 shipped today.")
        assert [c["claim_text"] for c in out] == ["Version 2.5 shipped today."]

    def test_empty_summary(self):
        assert sentence_claims("") == []
        assert sentence_claims(None) == []

    def test_generic_pair(self):
        out = generic_claims("Budget passes")
        assert len(out) == 2
        assert "Budget passes" in out[0]["claim_text"]
        assert out[0]["verdict"] == "unverifiable"
        assert out[1]["verdict"] == "partial"

    def test_generic_pair_without_headline(self):
        assert "(no title)" in generic_claims(None)[0]["claim_text"]


# ── JSON extraction ────────────────────────────────────────────────────

class TestJsonExtract:
    def test_strict_json(self):
        res = extract_json('[{"claim_text": "A"}]')
        assert res.ok
        assert res.value == [{"claim_text": "A"}]

    def test_fenced_json(self):
        res = extract_json('```json\n{"suggestions": []}\n```')
        assert res.ok
        assert res.value == {"suggestions": []}

    def test_object_embedded_in_prose(self):
        text = 'Sure! Here you go: {"suggestions": [{"text": "B", "verdict": "partial"}]} Hope it helps.'
        res = extract_json(text)
        assert res.ok
        assert res.value["suggestions"][0]["text"] == "B"

    def test_array_embedded_in_prose(self):
        res = extract_json('Claims: [{"claim_text": "C"}] -- end')
        assert res.ok
        assert res.value == [{"claim_text": "C"}]

    def test_braces_inside_strings(self):
        res = extract_json('note {"claim_text": "uses } and ] chars"} trailing } junk')
        assert res.ok
        assert res.value == {"claim_text": "uses } and ] chars"}

    def test_no_json(self):
        assert not extract_json("I cannot help with that.").ok
        assert not extract_json("").ok
        assert not extract_json(None).ok

    def test_unbalanced_json(self):
        assert not extract_json('{"suggestions": [').ok

    def test_unparseable_span_skipped_for_later_object(self):
        text = 'Based on the summary [see context], here you go: {"suggestions": [{"claim_text": "A"}]}'
        res = extract_json(text)
        assert res.ok
        assert res.value == {"suggestions": [{"claim_text": "A"}]}

    def test_rejected_span_skipped_for_later_object(self):
        text = 'Per source [1]: {"suggestions": [{"claim_text": "A"}]}'
        res = extract_json(text, accept=has_candidates)
        assert res.ok
        assert res.value == {"suggestions": [{"claim_text": "A"}]}

    def test_first_parse_returned_when_nothing_accepted(self):
        res = extract_json("Per source [1] and [2].", accept=has_candidates)
        assert res.ok
        assert res.value == [1]


class TestCandidatesFromPayload:
    def test_bare_array_of_objects(self):
        assert candidates_from_payload([{"claim_text": "A"}]) == [{"claim_text": "A"}]

    def test_wrapped_under_known_keys(self):
        assert candidates_from_payload({"suggestions": [{"text": "A"}]}) == [{"text": "A"}]
        assert candidates_from_payload({"claims": [{"text": "B"}]}) == [{"text": "B"}]

    def test_non_object_items_are_not_candidates(self):
        assert candidates_from_payload([1]) == []
        assert candidates_from_payload(["text", {"claim_text": "A"}]) == [{"claim_text": "A"}]
        assert not has_candidates([1, 2])

    def test_other_shapes(self):
        assert candidates_from_payload({"answer": "none"}) == []
        assert candidates_from_payload("string") == []
        assert candidates_from_payload(None) == []

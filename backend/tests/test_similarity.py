"""
Tests for similarity.py - word-overlap ranking of jobs.
"""

from types import SimpleNamespace

import pytest

from jobboard.services.similarity import SIMILAR_JOBS_LIMIT, overlap_score, rank, tokenize


def job(job_id: str, title: str, description: str = "", requirements: str = ""):
    return SimpleNamespace(id=job_id, title=title, description=description, requirements=requirements)


@pytest.fixture
def reference():
    return job("ref", "Backend Engineer", "build APIs", "node")


class TestTokenize:

    def test_lowercases_and_splits_on_non_word(self):
        assert tokenize("Build APIs, using REST!") == {"build", "apis", "using", "rest"}

    def test_duplicates_collapse(self):
        assert tokenize("node node NODE") == {"node"}

    def test_empty_text_has_no_tokens(self):
        assert tokenize("  ... ") == set()


class TestOverlapScore:

    def test_divides_by_larger_set(self):
        assert overlap_score({"a", "b"}, {"a", "b", "c", "d"}) == 0.5

    def test_identical_sets_score_one(self):
        assert overlap_score({"a", "b"}, {"b", "a"}) == 1.0

    def test_disjoint_sets_score_zero(self):
        assert overlap_score({"a"}, {"b"}) == 0.0

    def test_both_empty_score_zero(self):
        assert overlap_score(set(), set()) == 0.0


class TestRank:

    def test_excludes_reference_job(self, reference):
        candidates = [reference, job("a", "Backend Engineer", "build APIs", "node")]
        result = rank(reference, candidates)
        assert [scored.job.id for scored in result] == ["a"]

    def test_limits_to_five(self, reference):
        candidates = [job(str(i), "Engineer") for i in range(8)]
        assert len(rank(reference, candidates)) == SIMILAR_JOBS_LIMIT

    def test_scores_are_non_increasing(self, reference):
        candidates = [
            job("low", "Chef", "cook food"),
            job("high", "Backend Engineer", "build APIs", "node"),
            job("mid", "Frontend Engineer", "build pages"),
        ]
        scores = [scored.score for scored in rank(reference, candidates)]
        assert scores == sorted(scores, reverse=True)
        assert rank(reference, candidates)[0].job.id == "high"

    def test_ties_keep_store_order(self, reference):
        candidates = [job(name, "Engineer") for name in ("first", "second", "third")]
        assert [scored.job.id for scored in rank(reference, candidates)] == ["first", "second", "third"]

    def test_api_engineer_scores_above_zero(self, reference):
        candidate = job("api", "API Engineer", "build APIs using rest")
        result = rank(reference, [candidate])

        assert len(result) == 1
        assert result[0].job.id == "api"
        # {engineer, build, apis} shared, six candidate tokens
        assert result[0].score == pytest.approx(0.5)

    def test_no_candidates(self, reference):
        assert rank(reference, []) == []

    def test_scores_bounded(self, reference):
        candidates = [job("x", "Backend Engineer", "build APIs", "node"), job("y", "Chef")]
        for scored in rank(reference, candidates):
            assert 0.0 <= scored.score <= 1.0

import unittest

from cgrep import Matcher, MatchType, QueryBuilder, match, rank


HAYSTACKS = [
    "the quick brown fox jumps over the lazy dog",
    "The Quick-Brown FOX; a quack brawn fix!",
    "quick quick quick brown",
    "zzz yyy",
    "",
]


class TestMatch(unittest.TestCase):
    def test_exact_window(self):
        self.assertEqual(match("quick brown fox", "the quick brown fox jumps", 0.99), ["quick brown fox"])

    def test_dissimilar_needle(self):
        self.assertEqual(match("xyz123", "abc def ghi", 0.95), [])

    def test_last_window_is_considered(self):
        self.assertEqual(match("lazy dog", "the lazy dog", 0.99), ["lazy dog"])

    def test_haystack_shorter_than_needle(self):
        self.assertEqual(match("one two three", "one two", 0.0), [])
        self.assertEqual(match("one", "", 0.0), [])

    def test_empty_needle(self):
        self.assertEqual(match("", "anything at all", 0.0), [])
        self.assertEqual(match("!!!", "anything at all", 0.0), [])

    def test_canonicalizes_both_sides(self):
        self.assertEqual(match("Hello, World!", "...HELLO   world...", 0.99), ["hello world"])

    def test_overlapping_windows(self):
        self.assertEqual(match("abc abc", "abc abc abc", 0.99), ["abc abc", "abc abc"])

    def test_degenerate_thresholds(self):
        self.assertEqual(match("a b", "one two three", 0.0), ["one two", "two three"])
        self.assertEqual(match("a b", "one two three", -1.0), ["one two", "two three"])
        self.assertEqual(match("one two", "one two three", 1.01), [])

    def test_single_letter_words(self):
        # No bigrams on either side: two empty sets are identical.
        self.assertEqual(match("a", "a b c", 1.0), ["a", "b", "c"])

    def test_threshold_monotonic(self):
        matcher = Matcher()
        thresholds = [0.0, 0.1, 0.25, 0.4, 0.5, 0.6, 0.75, 0.9, 1.0]
        for haystack in HAYSTACKS:
            previous = None
            for threshold in thresholds:
                positions = {m.position for m in matcher.match_windows("quick brown fox", haystack, threshold)}
                if previous is not None:
                    self.assertTrue(positions <= previous, (haystack, threshold))
                previous = positions


class TestMatchWindows(unittest.TestCase):
    def test_fields(self):
        matches = Matcher().match_windows("quick brown fox", "the quick brown fox jumps", 0.3)
        exact = [m for m in matches if m.match_type is MatchType.EXACT]
        self.assertEqual(len(exact), 1)
        self.assertEqual(exact[0].position, 1)
        self.assertEqual(exact[0].score, 1.0)
        self.assertEqual(exact[0].edit_ratio, 1.0)
        self.assertEqual([m.position for m in matches], sorted(m.position for m in matches))
        for m in matches:
            self.assertGreaterEqual(m.score, 0.3)
            if m.match_type is MatchType.FUZZY:
                self.assertLess(m.edit_ratio, 1.0)

    def test_to_dict(self):
        m = Matcher().match_windows("lazy dog", "the lazy dog", 0.99)[0]
        self.assertEqual(m.to_dict()["match_type"], "exact")
        self.assertEqual(m.to_dict()["text"], "lazy dog")

    def test_rank(self):
        matches = Matcher().match_windows("brown fox", "a brown box then a brown fox", 0.2)
        ranked = rank(matches)
        self.assertEqual(ranked[0].text, "brown fox")
        scores = [m.score for m in ranked]
        self.assertEqual(scores, sorted(scores, reverse=True))


class TestCompiledQuery(unittest.TestCase):
    def test_build(self):
        query = QueryBuilder("Quick, brown FOX").build()
        self.assertEqual(query.needle, "quick brown fox")
        self.assertEqual(query.word_count, 3)
        self.assertEqual(query.stats["bigram_count"], query.bigrams.cardinality())
        self.assertIsNotNone(query.automaton)

    def test_prefilter(self):
        query = QueryBuilder("quick").build()
        self.assertFalse(query.may_match("zzz yyy", 0.5))
        self.assertTrue(query.may_match("zzz yyy", 0.0))
        self.assertTrue(query.may_match("a quack", 0.5))

    def test_no_automaton_for_short_needle(self):
        self.assertIsNone(QueryBuilder("a").build().automaton)
        self.assertIsNone(QueryBuilder("quick", prefilter=False).build().automaton)

    def test_prefilter_does_not_change_results(self):
        with_filter = Matcher(prefilter=True)
        without_filter = Matcher(prefilter=False)
        for needle in ("quick brown fox", "dog", "a", "zq"):
            for haystack in HAYSTACKS:
                for threshold in (0.0, 0.2, 0.5, 1.0):
                    self.assertEqual(
                        with_filter.match(needle, haystack, threshold),
                        without_filter.match(needle, haystack, threshold),
                        (needle, haystack, threshold)
                    )

    def test_compiled_query_is_reusable(self):
        matcher = Matcher()
        query = matcher.compile("lazy dog")
        self.assertIs(matcher.compile(query), query)
        self.assertEqual(matcher.match(query, "the lazy dog", 0.99), ["lazy dog"])
        self.assertEqual(matcher.match(query, "a lazy dog again", 0.99), ["lazy dog"])


if __name__ == "__main__":
    unittest.main()

"""
검색 DSL 빌더 테스트
"""

import pytest

from search.query import match_all_query, page_query, term_query, terms_aggregation_query


class TestPageQuery:
    """페이지 쿼리 테스트"""

    def test_first_page(self):
        body = page_query(term_query("title", "xiaomi"), 0, 5)
        assert body == {
            "query": {"term": {"title": "xiaomi"}},
            "from": 0,
            "size": 5,
            "track_total_hits": True,
        }

    def test_offset(self):
        body = page_query(None, 3, 20)
        assert body["from"] == 60
        assert body["query"] == match_all_query()

    def test_sort(self):
        body = page_query(None, 0, 5, sort=[{"id": "desc"}])
        assert body["sort"] == [{"id": "desc"}]

    @pytest.mark.parametrize("page_num,page_size", [(-1, 5), (0, -1)])
    def test_negative(self, page_num, page_size):
        with pytest.raises(ValueError):
            page_query(None, page_num, page_size)


class TestTermsAggregationQuery:
    def test_shape(self):
        body = terms_aggregation_query("by_category", "category", size=20)
        assert body["size"] == 0
        assert body["aggs"] == {"by_category": {"terms": {"field": "category", "size": 20}}}
        assert body["query"] == {"match_all": {}}

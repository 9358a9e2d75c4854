"""ResponseParser 단위 테스트.

테스트 범위:
- 정상 응답 파싱
- 카테고리/근거 개수 불일치
- 잘못된 응답은 예외 대신 오류 결과
"""

import pytest

from giftidea.models import MODEL_RESPONSE_ERROR
from giftidea.services.response_parser import ResponseParser


@pytest.fixture
def parser() -> ResponseParser:
    return ResponseParser()


class TestParseSuccess:
    """정상 파싱 테스트."""

    def test_compact_reply(self, parser):
        """카테고리 3개와 근거 3개."""
        reply = "1. [지갑,향수,시계]\n- 지갑: [자주 언급됨]\n- 향수: [선호 표현]\n- 시계: [생일 언급]"
        result = parser.parse(reply)

        assert result.ok
        assert result.recommendation.categories == ["지갑", "향수", "시계"]
        assert result.recommendation.reasons == ["자주 언급됨", "선호 표현", "생일 언급"]

    def test_indented_reason_lines(self, parser, sample_reply):
        """들여쓴 근거 줄도 인식."""
        result = parser.parse(sample_reply)

        assert result.recommendation.reasons == ["자주 언급됨", "선호 표현", "생일 언급"]

    def test_preamble_before_marker(self, parser):
        """'1.' 앞의 설명 문장은 무시."""
        reply = "분석 결과입니다.\n1. [ 지갑 , 향수 ]\n- 지갑: [ 낡았다고 함 ]"
        result = parser.parse(reply)

        assert result.recommendation.categories == ["지갑", "향수"]
        assert result.recommendation.reasons == ["낡았다고 함"]

    def test_category_count_not_enforced(self, parser):
        """카테고리 개수는 강제하지 않는다."""
        result = parser.parse("1. [a,b,c,d]\n")

        assert result.recommendation.categories == ["a", "b", "c", "d"]
        assert result.recommendation.reasons == []

    def test_reason_lines_without_marker_are_skipped(self, parser):
        """': [' 가 없는 근거 줄은 건너뛴다."""
        reply = "1. [a,b,c]\n- a: 괄호 없음\n- b: [근거 b]\n- c: [근거 c]"
        result = parser.parse(reply)

        assert result.recommendation.categories == ["a", "b", "c"]
        assert result.recommendation.reasons == ["근거 b", "근거 c"]

    def test_pairs_by_position(self, parser):
        """근거가 모자라면 뒤쪽 카테고리는 근거 없음."""
        result = parser.parse("1. [a,b]\n- a: [r1]")

        assert result.recommendation.pairs() == [("a", "r1"), ("b", None)]

    def test_empty_entry_keeps_positions(self, parser):
        """빈 카테고리도 자리를 유지해 근거가 밀리지 않는다."""
        result = parser.parse("1. [a,,b]\n- a: [r1]\n- 빈칸: [r2]\n- b: [r3]")

        assert result.ok
        assert result.recommendation.categories == ["a", "", "b"]
        assert result.recommendation.pairs() == [("a", "r1"), ("", "r2"), ("b", "r3")]

    def test_last_character_is_dropped(self, parser):
        """근거는 마지막 한 글자(닫는 괄호) 앞까지."""
        result = parser.parse("1. [a]\n- a: [근거].")

        assert result.recommendation.reasons == ["근거]"]


class TestParseFailure:
    """오류 응답 테스트."""

    @pytest.mark.parametrize(
        "reply",
        [
            None,
            "",
            "카테고리: 지갑, 향수, 시계",
            "1. 지갑, 향수, 시계\n- 지갑: [근거]",
            "1. []\n",
            "1. [ , ]\n",
            "1. [a]\n- a: [",
        ],
        ids=["none", "empty", "no-marker", "no-brackets", "empty-list", "blank-entries", "truncated-reason"],
    )
    def test_malformed_reply_is_error_result(self, parser, reply):
        """예외를 던지지 않고 오류 결과를 돌려준다."""
        result = parser.parse(reply)

        assert not result.ok
        assert result.recommendation is None
        assert result.error == MODEL_RESPONSE_ERROR
        assert result.detail

    def test_bracket_on_later_line_is_not_used(self, parser):
        """카테고리 목록은 '1.' 과 같은 줄에 있어야 한다."""
        result = parser.parse("1.\n[a,b,c]")

        assert not result.ok

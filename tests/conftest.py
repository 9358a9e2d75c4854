"""테스트 설정 및 공용 Fixtures."""

import pytest

from giftidea.models import PersonaDescriptor, Product
from giftidea.services.catalog_service import BaseCatalogService
from giftidea.services.llm_service import BaseLLMService, LLMServiceError


SAMPLE_REPLY = (
    "1. [지갑,향수,시계]\n"
    "2.\n"
    "   - 지갑: [자주 언급됨]\n"
    "   - 향수: [선호 표현]\n"
    "   - 시계: [생일 언급]"
)


# ============================================================================
# Mock Services
# ============================================================================

class MockLLMService(BaseLLMService):
    """테스트용 Mock LLM 서비스.

    response 속성으로 반환값을 제어할 수 있다.
    should_fail 을 설정하면 호출 실패를 흉내낸다.
    """

    def __init__(self):
        self.response = SAMPLE_REPLY
        self.should_fail = False
        self.call_count = 0
        self.prompts: list[str] = []

    def call(self, prompt: str) -> str:
        self.call_count += 1
        self.prompts.append(prompt)

        if self.should_fail:
            raise LLMServiceError("Mock LLM failure")

        return self.response

    def reset(self):
        """상태 초기화."""
        self.call_count = 0
        self.prompts = []


class MockCatalogService(BaseCatalogService):
    """키워드마다 상품 하나를 돌려주는 Mock 카탈로그."""

    def __init__(self):
        self.searched: list[list[str]] = []
        self.should_fail = False

    def search_by_keywords(self, keywords: list[str]) -> list[Product]:
        self.searched.append(list(keywords))
        if self.should_fail:
            raise RuntimeError("Mock catalog failure")
        return [
            Product(product_id=str(i), title=f"{keyword} 상품", keyword=keyword)
            for i, keyword in enumerate(keywords)
        ]


# ============================================================================
# Chat Export Fixtures
# ============================================================================

@pytest.fixture
def format_a_export() -> str:
    """PC 버전 카카오톡 내보내기 (헤더 + [이름] [시간] 형식)."""
    return (
        "철수 님과 카카오톡 대화\n"
        "저장한 날짜 : 2024-02-01 12:00:00\n"
        "\n"
        "[철수] [오후 3:15] 요즘 지갑이 너무 낡았어ㅋㅋ\n"
        "[영희] [오후 3:16] 그래?\n"
        "[철수] [오후 3:17] 향수도 다 썼다.\n"
    )


@pytest.fixture
def format_b_export() -> str:
    """모바일 버전 카카오톡 내보내기 (이름 : 메시지 형식)."""
    return (
        "2024년 2월 1일 목요일\n"
        "철수 : 안녕ㅋㅋㅋ.\n"
        "영희 : 안녕\n"
        "철수 : 지갑 사고 싶다\n"
    )


# ============================================================================
# Persona Fixtures
# ============================================================================

@pytest.fixture
def couple_woman() -> PersonaDescriptor:
    return PersonaDescriptor.create("couple", "female", "birthday")


@pytest.fixture
def unmatched_persona() -> PersonaDescriptor:
    """어떤 규칙에도 해당하지 않는 페르소나."""
    return PersonaDescriptor.create("other", "unspecified", "birthday")


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def sample_reply() -> str:
    """들여쓴 근거 줄을 포함한 정상 모델 응답."""
    return SAMPLE_REPLY


@pytest.fixture
def mock_llm() -> MockLLMService:
    """Mock LLM 서비스 생성."""
    return MockLLMService()


@pytest.fixture
def mock_catalog() -> MockCatalogService:
    """Mock 카탈로그 생성."""
    return MockCatalogService()

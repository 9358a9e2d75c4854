"""Prompt Service - Persona-specific recommendation prompts.

This module handles:
- The closed category vocabulary of each recommendation template
- Selecting a template for a persona through an ordered rule chain
- Rendering the prompt that asks the model for 3 categories with reasons

Interface Contract:
- PromptBuilder.select(persona) -> PromptTemplate | None
- PromptBuilder.build(text, persona) -> str | None (None = no rule matched)

Rules are evaluated in order and the first match wins, so e.g. a friend with
a valentine theme gets the Friend template, not a seasonal one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from config import SEASONAL_THEMES
from giftidea.models import PersonaDescriptor, Relation, Sex

HOUSEWARMING_THEME = "housewarming"

OUTPUT_FORMAT = """출력 형식:
1. [카테고리1,카테고리2,카테고리3]
2.
   - 카테고리1: [근거1]
   - 카테고리2: [근거2]
   - 카테고리3: [근거3]"""


@dataclass(frozen=True)
class PromptTemplate:
    """A recommendation prompt with its category vocabulary."""
    name: str
    audience: str  # who receives the gift, "{theme}" is substituted
    categories: tuple[str, ...]
    allow_other_categories: bool = False

    def render(self, text: str, theme: str) -> str:
        """Render the prompt for the given chat text and theme."""
        audience = self.audience.replace("{theme}", theme)
        extra = ""
        if self.allow_other_categories:
            extra = "제시된 카테고리에 없는 추천 선물이 있다면 3개에 포함해주세요.\n"

        return f"""다음 텍스트를 참고하여 {audience} 선물로 받으면 좋아할 카테고리 3개와 판단에 참고한 대화를 제공해주세요.
{extra}카테고리: {', '.join(self.categories)}

텍스트: {text}

{OUTPUT_FORMAT}
"""


COUPLE_MAN = PromptTemplate(
    name="CoupleMan",
    audience="남자 애인이 {theme}에",
    categories=(
        "남성 지갑", "남성 스니커즈", "백팩", "토트백", "크로스백", "벨트", "선글라스", "향수",
        "헬스가방", "무선이어폰", "스마트워치", "맨투맨", "마우스", "키보드", "전기면도기", "게임기",
    ),
)

COUPLE_WOMAN = PromptTemplate(
    name="CoupleWoman",
    audience="여자 애인이 {theme}에",
    categories=(
        "여성 지갑", "여성 스니커즈", "숄더백", "토트백", "크로스백", "향수", "목걸이",
        "무선이어폰", "스마트워치", "에어랩",
    ),
)

DAD = PromptTemplate(
    name="Dad",
    audience="부모님이 {theme}에",
    categories=("현금 박스", "안마기기", "아버지 신발", "시계"),
)

MOM = PromptTemplate(
    name="Mom",
    audience="부모님이 {theme}에",
    categories=("현금 박스", "안마기기", "어머니 신발", "건강식품", "스카프"),
)

FRIEND = PromptTemplate(
    name="Friend",
    audience="친구가 {theme}에",
    categories=("핸드크림", "텀블러", "립밤", "머플러", "비타민", "입욕제", "블루투스 스피커"),
    allow_other_categories=True,
)

HOUSEWARMING = PromptTemplate(
    name="Housewarming",
    audience="집들이에",
    categories=(
        "조명", "핸드워시", "식기", "디퓨저", "오설록 티세트", "휴지", "파자마세트", "무드등",
        "수건", "전기포트", "에어프라이기",
    ),
)

SEASONAL_MAN = PromptTemplate(
    name="SeasonalMan",
    audience="{theme}에",
    categories=("초콜릿", "수제 초콜릿 키트", "파자마세트", "남자 화장품"),
)

SEASONAL_WOMAN = PromptTemplate(
    name="SeasonalWoman",
    audience="{theme}에",
    categories=("초콜릿", "수제 초콜릿 키트", "립밤", "파자마세트", "립스틱"),
)


@dataclass(frozen=True)
class PromptRule:
    """Selects a template when its predicate matches the persona."""
    template: PromptTemplate
    predicate: Callable[[PersonaDescriptor], bool]

    @property
    def name(self) -> str:
        return self.template.name


def default_rules(seasonal_themes: Iterable[str] = SEASONAL_THEMES) -> tuple[PromptRule, ...]:
    """The persona rule chain, in priority order."""
    seasonal = frozenset(t.lower() for t in seasonal_themes)

    def is_seasonal(p: PersonaDescriptor) -> bool:
        return p.normalized_theme in seasonal

    return (
        PromptRule(COUPLE_MAN, lambda p: p.relation is Relation.COUPLE and p.sex is Sex.MALE),
        PromptRule(COUPLE_WOMAN, lambda p: p.relation is Relation.COUPLE and p.sex is Sex.FEMALE),
        PromptRule(DAD, lambda p: p.relation is Relation.PARENT and p.sex is Sex.MALE),
        PromptRule(MOM, lambda p: p.relation is Relation.PARENT and p.sex is Sex.FEMALE),
        PromptRule(FRIEND, lambda p: p.relation is Relation.FRIEND),
        PromptRule(HOUSEWARMING, lambda p: p.normalized_theme == HOUSEWARMING_THEME),
        PromptRule(SEASONAL_MAN, lambda p: is_seasonal(p) and p.sex is Sex.MALE),
        PromptRule(SEASONAL_WOMAN, lambda p: is_seasonal(p) and p.sex is Sex.FEMALE),
    )


class PromptBuilder:
    """Renders the recommendation prompt for a persona."""

    def __init__(self, rules: Iterable[PromptRule] | None = None):
        self.rules: tuple[PromptRule, ...] = tuple(rules) if rules is not None else default_rules()

    def select(self, persona: PersonaDescriptor) -> PromptTemplate | None:
        """Return the template of the first matching rule, or None."""
        for rule in self.rules:
            if rule.predicate(persona):
                return rule.template
        return None

    def build(self, text: str, persona: PersonaDescriptor) -> str | None:
        """Render the prompt for the chat text, or None if no rule matches."""
        template = self.select(persona)
        if template is None:
            return None
        return template.render(text, persona.theme)

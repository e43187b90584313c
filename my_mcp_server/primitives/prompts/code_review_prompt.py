# primitives/prompts/code_review_prompt.py
"""Code review prompt - builds a structured review request for a code snippet."""

from typing import Optional

from pydantic import Field

from ...prompt_decorator import Prompt
from ...schemas import Params

CODE_REVIEW_TEMPLATE = """다음 코드를 리뷰해주세요. 다음 항목들을 중점적으로 검토해주세요:

1. **코드 품질**
   - 가독성과 유지보수성
   - 네이밍 컨벤션
   - 코드 구조와 조직화

2. **성능**
   - 잠재적인 성능 병목
   - 최적화 가능한 부분
   - 메모리 사용 효율성

3. **보안**
   - 보안 취약점
   - 입력 검증
   - 에러 처리

4. **모범 사례**
   - 언어별 베스트 프랙티스 준수 여부
   - 디자인 패턴 적용
   - 테스트 가능성

5. **개선 제안**
   - 구체적인 개선 방안
   - 리팩토링 제안
   - 대안 코드 예시

**리뷰할 코드:**
```
{code}
```

위 코드에 대한 상세한 리뷰를 제공해주세요."""

LANGUAGE_GUIDELINES: dict[str, str] = {
    "typescript": (
        "\n\n**TypeScript 특화 검토 사항:**\n"
        "- 타입 안정성과 타입 추론\n"
        "- 제네릭 사용의 적절성\n"
        "- 인터페이스와 타입 정의의 명확성"
    ),
    "javascript": (
        "\n\n**JavaScript 특화 검토 사항:**\n"
        "- ES6+ 기능 활용\n"
        "- 비동기 처리 (Promise, async/await)\n"
        "- 스코프와 클로저 사용"
    ),
    "python": (
        "\n\n**Python 특화 검토 사항:**\n"
        "- PEP 8 스타일 가이드 준수\n"
        "- 리스트 컴프리헨션 활용\n"
        "- 예외 처리와 컨텍스트 매니저 사용"
    ),
    "java": (
        "\n\n**Java 특화 검토 사항:**\n"
        "- 객체지향 설계 원칙\n"
        "- 예외 처리 전략\n"
        "- 컬렉션 프레임워크 활용"
    ),
    "go": (
        "\n\n**Go 특화 검토 사항:**\n"
        "- 에러 처리 패턴\n"
        "- 고루틴과 채널 사용\n"
        "- 인터페이스 설계"
    ),
}

FOCUS_GUIDELINES: dict[str, str] = {
    "performance": (
        "\n\n**성능 최적화 집중 검토:**\n"
        "- 알고리즘 시간 복잡도 분석\n"
        "- 불필요한 반복문이나 중첩 루프\n"
        "- 캐싱 가능한 연산\n"
        "- 데이터베이스 쿼리 최적화"
    ),
    "security": (
        "\n\n**보안 집중 검토:**\n"
        "- SQL 인젝션 방지\n"
        "- XSS 공격 방지\n"
        "- 인증 및 권한 검증\n"
        "- 민감 정보 노출 방지"
    ),
    "readability": (
        "\n\n**가독성 집중 검토:**\n"
        "- 변수와 함수명의 명확성\n"
        "- 주석의 적절성\n"
        "- 코드 길이와 복잡도\n"
        "- 일관된 코딩 스타일"
    ),
}


class CodeReviewParams(Params):
    code: str = Field(description="리뷰할 코드")
    language: Optional[str] = Field(
        default=None,
        description="코드 언어 (선택사항, 예: typescript, javascript, python 등)",
    )
    focus: Optional[str] = Field(
        default=None,
        description="특별히 집중할 리뷰 영역 (선택사항, 예: performance, security, readability)",
    )


# ============================================================================
# MCP PROMPT
# ============================================================================

@Prompt(
    "code-review",
    "코드를 입력받아 코드 리뷰를 위한 프롬프트를 생성합니다.",
    params=CodeReviewParams,
)
def code_review(code: str, language: Optional[str] = None, focus: Optional[str] = None) -> str:
    """Generate a code review prompt.

    Args:
        code: Code to review, inserted verbatim into the template
        language: Adds language-specific checks for typescript, javascript,
                  python, java or go (case-insensitive; others are ignored)
        focus: Adds a focus block for performance, security or readability
               (case-insensitive; others are ignored)

    Returns:
        The review prompt text
    """
    prompt = CODE_REVIEW_TEMPLATE.replace("{code}", code or "", 1)

    if language:
        prompt += LANGUAGE_GUIDELINES.get(language.lower(), "")

    if focus:
        prompt += FOCUS_GUIDELINES.get(focus.lower(), "")

    return prompt

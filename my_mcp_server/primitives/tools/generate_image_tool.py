"""Generate image tool - text-to-image through the Hugging Face inference API."""
import base64
import logging

import httpx
from pydantic import Field

from ...config import get_config
from ...handler_wrappers import HandlerError
from ...http_client import create_client
from ...schemas import Params
from ...tool_decorator import Tool

logger = logging.getLogger(__name__)

HF_INFERENCE_URL = "https://router.huggingface.co/hf-inference/models/{model}"
NUM_INFERENCE_STEPS = 5
DEFAULT_IMAGE_MIME = "image/png"


class GenerateImageParams(Params):
    prompt: str = Field(description="이미지 생성을 위한 텍스트 프롬프트")


def _api_failure(detail: str) -> HandlerError:
    return HandlerError(
        f"Hugging Face API 호출 실패: {detail}. HF_TOKEN이 올바르게 설정되어 있는지 확인해주세요."
    )


def to_data_uri(data: bytes, mime_type: str = DEFAULT_IMAGE_MIME) -> str:
    """Encode binary image data as a base64 data URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


async def text_to_image(prompt: str, token: str, model: str) -> tuple[bytes, str]:
    """Call the inference endpoint and return (image bytes, MIME type)."""
    url = HF_INFERENCE_URL.format(model=model)
    payload = {"inputs": prompt, "parameters": {"num_inference_steps": NUM_INFERENCE_STEPS}}

    async with create_client(headers={"Authorization": f"Bearer {token}", "Accept": "image/png"}) as client:
        try:
            response = await client.post(url, json=payload)
        except httpx.TimeoutException:
            logger.error("Hugging Face API timeout for model %s", model)
            raise _api_failure("요청 시간 초과") from None
        except httpx.HTTPError as e:
            logger.error("Hugging Face API error: %s", e)
            raise _api_failure(str(e)) from e

    if not response.is_success:
        detail = f"{response.status_code} {response.reason_phrase}"
        logger.error("Hugging Face API error: %s %s", detail, response.text[:200])
        raise _api_failure(detail)

    mime_type = response.headers.get("content-type", "").split(";")[0].strip() or DEFAULT_IMAGE_MIME
    if not mime_type.startswith("image/"):
        # JSON error bodies sometimes come back with 200
        logger.error("Hugging Face API returned non-image content: %s", mime_type)
        raise _api_failure(f"이미지가 아닌 응답 ({mime_type})")
    return response.content, mime_type


@Tool(
    "generate-image",
    "프롬프트를 입력받아 AI로 이미지를 생성합니다.",
    params=GenerateImageParams,
)
async def generate_image(prompt: str) -> str:
    config = get_config()
    if not config.hf_token:
        raise HandlerError("HF_TOKEN 환경 변수가 설정되지 않았습니다.")

    image, mime_type = await text_to_image(prompt, config.hf_token, config.hf_image_model)
    logger.info("Generated image: %d bytes (%s)", len(image), mime_type)
    return to_data_uri(image, mime_type)

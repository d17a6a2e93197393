"""Health check router."""

from fastapi import APIRouter
from datetime import datetime, timezone
from policy_assistant import __version__
from policy_assistant.schemas.health import HealthResponse, ServiceStatus
from policy_assistant.dependencies import SettingsDep
from policy_assistant.utils.logger import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """
    Report whether the collaborators this API needs are configured.

    Checks:
    - LLM provider key for the default model
    - Clerk instance domain for token verification
    - Supabase project URL (used by the frontend for storage)

    Returns:
        HealthResponse with status and service details
    """
    services = {}

    default_model = settings.default_llm_model
    provider = default_model.split("/", 1)[0] if "/" in default_model else "openai"
    # Only OpenAI keys are read from settings; other providers rely on LiteLLM env vars
    has_key = bool(settings.openai_api_key) if provider == "openai" else True
    services["llm"] = ServiceStatus(
        status="configured" if has_key else "not_configured",
        message=f"Provider '{provider}'" if has_key else f"No API key for provider '{provider}'",
        details={
            "title_model": settings.get_title_model(),
            "tag_model": settings.get_tag_model(),
        },
    )

    services["auth"] = ServiceStatus(
        status="configured" if settings.clerk_domain else "not_configured",
        message="Clerk" if settings.clerk_domain else "Clerk domain not set",
    )

    services["storage"] = ServiceStatus(
        status="configured" if settings.supabase_url else "not_configured",
        message="Supabase" if settings.supabase_url else "Supabase URL not set",
    )

    overall_status = "ok"
    if any(s.status == "not_configured" for name, s in services.items() if name != "storage"):
        overall_status = "degraded"
        log.warning(
            "health check degraded",
            services={name: s.status for name, s in services.items()},
        )

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

"""
Startup Validation Module for BriefOS.

Checks the Gemini credential and the brief store on application startup.
Nothing here is fatal: a missing key means demo mode and an unavailable
database means in-memory history.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from briefos.storage.brief_store import BriefStore

from .credentials import CredentialResolver, mask_key

logger = logging.getLogger(__name__)


class ServiceStatus(Enum):
    """Status of a validated service."""
    AVAILABLE = "available"
    DEGRADED = "degraded"


@dataclass
class ValidationResult:
    """Result of a single validation check."""
    service: str
    status: ServiceStatus
    message: str
    details: Optional[Dict[str, Any]] = None


@dataclass
class StartupValidation:
    """Complete startup validation results."""
    warnings: List[str] = field(default_factory=list)
    services: Dict[str, ValidationResult] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)

    def add_result(self, result: ValidationResult):
        """Add a validation result."""
        self.services[result.service] = result

        if result.status == ServiceStatus.DEGRADED:
            self.warnings.append(f"[{result.service}] {result.message}")

    def print_summary(self):
        """Print validation summary."""
        print("\n" + "=" * 60)
        print("🔍 BriefOS Startup Validation")
        print("=" * 60)

        for service, result in self.services.items():
            icon = {
                ServiceStatus.AVAILABLE: "✅",
                ServiceStatus.DEGRADED: "⚠️",
            }[result.status]
            print(f"{icon} {service}: {result.status.value}")
            if result.status != ServiceStatus.AVAILABLE:
                print(f"   → {result.message}")

        print("-" * 60)

        if self.degraded:
            print("\n⚠️  WARNINGS (running in degraded mode):")
            for warning in self.warnings:
                print(f"   • {warning}")
        else:
            print("\n✅ All services available")

        print("=" * 60 + "\n")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "degraded": self.degraded,
            "warnings": list(self.warnings),
            "services": {
                name: {
                    "status": result.status.value,
                    "message": result.message,
                    "details": result.details,
                }
                for name, result in self.services.items()
            },
        }


def validate_gemini_api(resolver: CredentialResolver) -> ValidationResult:
    """Validate that a Gemini API key can be resolved."""
    diagnosis = resolver.diagnose()

    if not diagnosis.available:
        return ValidationResult(
            service="Gemini API",
            status=ServiceStatus.DEGRADED,
            message=f"{diagnosis.reason}. Briefs will be generated in DEMO MODE.",
            details={
                "mode": diagnosis.mode,
                "env_var_present": diagnosis.env_var_present,
                "key_length": diagnosis.key_length,
            },
        )

    return ValidationResult(
        service="Gemini API",
        status=ServiceStatus.AVAILABLE,
        message=f"Gemini API key found in {diagnosis.source}",
        details={
            "mode": diagnosis.mode,
            "source": diagnosis.source,
            "key_prefix": mask_key(diagnosis.credential),
            "key_length": diagnosis.key_length,
        },
    )


def validate_brief_store(store: BriefStore) -> ValidationResult:
    """Validate that brief history is durable."""
    status = store.describe()

    if not status["durable"]:
        return ValidationResult(
            service="Brief Store",
            status=ServiceStatus.DEGRADED,
            message=(
                f"Using in-memory history; briefs are lost on restart. "
                f"{status['fallback_reason'] or ''}"
            ).strip(),
            details=status,
        )

    return ValidationResult(
        service="Brief Store",
        status=ServiceStatus.AVAILABLE,
        message=f"SQLite history at {store.settings.db_path}",
        details=status,
    )


def run_startup_validation(
    resolver: CredentialResolver,
    store: BriefStore,
    print_summary: bool = True,
) -> StartupValidation:
    """
    Run complete startup validation.

    Args:
        resolver: Credential resolver for the Gemini key
        store: The brief store the app will use
        print_summary: Print validation summary

    Returns:
        StartupValidation with all results
    """
    validation = StartupValidation()
    validation.add_result(validate_gemini_api(resolver))
    validation.add_result(validate_brief_store(store))

    for warning in validation.warnings:
        logger.warning(warning)

    if print_summary:
        validation.print_summary()

    return validation

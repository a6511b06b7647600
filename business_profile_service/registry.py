import logging
import time
from typing import Callable

from shared.exceptions import AlreadyExistsError, NotAuthorizedError, NotFoundError

from .schemas import BusinessProfile, BusinessProfileInput
from .validation import validate_profile

logger = logging.getLogger(__name__)


class ProfileRegistry:
    """Business profiles keyed by owner identity. Only the owner may write."""

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self.clock = clock
        self._profiles: dict[str, BusinessProfile] = {}

    def __len__(self) -> int:
        return len(self._profiles)

    def create(self, caller: str, profile: BusinessProfileInput) -> BusinessProfile:
        if profile.owner != caller:
            raise NotAuthorizedError(caller, profile.owner)
        validate_profile(profile)
        if caller in self._profiles:
            raise AlreadyExistsError(caller, kind="profile")

        now = self.clock()
        created = BusinessProfile(**profile.model_dump(), created_at=now, updated_at=now)
        self._profiles[caller] = created
        logger.info(f"Created business profile for {caller}: {profile.business_name}")
        return created.model_copy(deep=True)

    def get(self, owner: str) -> BusinessProfile:
        profile = self._profiles.get(owner)
        if profile is None:
            raise NotFoundError(owner, kind="profile")
        return profile.model_copy(deep=True)

    def update(self, caller: str, profile: BusinessProfileInput) -> BusinessProfile:
        """Overwrites the editable fields; created_at and completed steps are kept."""
        if profile.owner != caller:
            raise NotAuthorizedError(caller, profile.owner)
        validate_profile(profile)
        existing = self._profiles.get(caller)
        if existing is None:
            raise NotFoundError(caller, kind="profile")

        updated = BusinessProfile(
            **profile.model_dump(),
            completed_steps=list(existing.completed_steps),
            created_at=existing.created_at,
            updated_at=self.clock(),
        )
        self._profiles[caller] = updated
        logger.info(f"Updated business profile for {caller}")
        return updated.model_copy(deep=True)

    def save_completed_step(self, caller: str, step_id: int) -> list[int]:
        profile = self._profiles.get(caller)
        if profile is None:
            raise NotFoundError(caller, kind="profile")
        if step_id not in profile.completed_steps:
            profile.completed_steps.append(step_id)
            profile.updated_at = self.clock()
            logger.info(f"Profile {caller} completed onboarding step {step_id}")
        return list(profile.completed_steps)

    def get_completed_steps(self, owner: str) -> list[int]:
        return list(self.get(owner).completed_steps)

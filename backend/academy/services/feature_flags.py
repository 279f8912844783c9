"""Feature flag lookup passed explicitly into services and views."""
from typing import Dict, Iterable, Mapping, Optional

from academy import db
from academy.models.gamification import FeatureFlag


class FeatureFlags:
    """Immutable snapshot of flag states; unknown keys are disabled."""

    def __init__(self, states: Mapping[str, bool] = None, defaults: Mapping[str, bool] = None):
        merged = dict(defaults or {})
        merged.update(states or {})
        self._states = merged

    @classmethod
    def from_rows(cls, rows: Iterable[FeatureFlag], defaults: Mapping[str, bool] = None) -> 'FeatureFlags':
        return cls({row.feature_key: row.is_enabled for row in rows}, defaults)

    @classmethod
    def load(cls, defaults: Mapping[str, bool] = None) -> 'FeatureFlags':
        return cls.from_rows(FeatureFlag.query.all(), defaults)

    def is_enabled(self, feature_key: str) -> bool:
        return bool(self._states.get(feature_key, False))

    def as_dict(self) -> Dict[str, bool]:
        return dict(self._states)


class FeatureFlagService:

    @staticmethod
    def list_flags():
        return FeatureFlag.query.order_by(FeatureFlag.phase, FeatureFlag.feature_name).all()

    @staticmethod
    def set_flag(feature_key: str, is_enabled: bool, feature_name: Optional[str] = None,
                 description: Optional[str] = None) -> FeatureFlag:
        flag = FeatureFlag.query.filter_by(feature_key=feature_key).first()
        if flag is None:
            flag = FeatureFlag(
                feature_key=feature_key,
                feature_name=feature_name or feature_key.replace('_', ' ').title(),
            )
            db.session.add(flag)
        flag.is_enabled = bool(is_enabled)
        if description is not None:
            flag.description = description
        db.session.commit()
        return flag

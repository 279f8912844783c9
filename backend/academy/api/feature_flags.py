"""Feature flag administration."""
from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required

from academy.services.feature_flags import FeatureFlags, FeatureFlagService
from academy.utils.decorators import admin_required, login_required
from academy.utils.helpers import error_response, success_response

feature_flags_bp = Blueprint('feature_flags', __name__)


@feature_flags_bp.route('', methods=['GET'])
@jwt_required()
@login_required
def list_flags(current_user):
    """Effective flag states plus the stored rows."""
    flags = FeatureFlags.load(current_app.config.get('FEATURE_FLAG_DEFAULTS'))
    return success_response(data={
        'effective': flags.as_dict(),
        'flags': [flag.to_dict() for flag in FeatureFlagService.list_flags()],
    })


@feature_flags_bp.route('/<string:feature_key>', methods=['PUT'])
@jwt_required()
@admin_required
def set_flag(feature_key, current_user):
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get('is_enabled'), bool):
        return error_response("is_enabled must be true or false", 400)

    flag = FeatureFlagService.set_flag(
        feature_key,
        data['is_enabled'],
        feature_name=data.get('feature_name'),
        description=data.get('description'),
    )
    current_app.logger.info("Feature %s set to %s by user %s", feature_key, flag.is_enabled, current_user.id)
    return success_response(data=flag.to_dict(), message="Feature flag updated")

# donations/matching.py
"""
Donor matching

Candidate donors come from the database (donor flag, compatible blood
type), then algorithms.ranking orders them by distance and pages them.
"""
import logging

from django.contrib.auth import get_user_model

from algorithms.blood_compatibility import get_compatible_donors
from algorithms.ranking import DEFAULT_LIMIT, DEFAULT_PAGE, rank_by_distance
from redhope.geo import filter_bounding_box

User = get_user_model()

logger = logging.getLogger(__name__)


def donor_candidates(blood_type=None, exclude=None):
    """
    Donors that may give to blood_type.

    Args:
        blood_type: Recipient blood type; None, 'Any' or unknown types match every donor
        exclude: User (or user id) to leave out, usually the requester
    """
    queryset = User.objects.filter(is_donor=True, is_active=True)
    if blood_type:
        queryset = queryset.filter(blood_type__in=get_compatible_donors(blood_type))
    if exclude is not None:
        queryset = queryset.exclude(pk=getattr(exclude, 'pk', exclude))
    return queryset


def find_nearby_donors(latitude, longitude, blood_type=None, exclude=None,
                       page=DEFAULT_PAGE, limit=DEFAULT_LIMIT, max_distance=None):
    """
    Rank compatible donors around a point.

    Args:
        latitude, longitude: Origin (already validated)
        blood_type: Recipient blood type filter (optional)
        exclude: User to leave out (optional)
        page, limit: 1-indexed pagination
        max_distance: Radius in km (optional); narrows the query with a bounding box

    Returns:
        RankedPage of (user, distance_km) tuples, nearest first
    """
    candidates = donor_candidates(blood_type, exclude)
    if max_distance is not None:
        candidates = filter_bounding_box(candidates, latitude, longitude, max_distance)
    else:
        candidates = candidates.filter(latitude__isnull=False, longitude__isnull=False)

    result = rank_by_distance(latitude, longitude, candidates, page, limit, max_distance)
    logger.debug(
        "Donor ranking at (%s, %s) for %s: %d candidates, page %d",
        latitude, longitude, blood_type or 'any', result.total, page,
    )
    return result


def donor_payload(user, distance):
    return {
        'id': str(user.pk),
        'username': user.username,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'bloodType': user.blood_type,
        'phoneNumber': user.phone_number,
        'cityId': user.city_id,
        'location': {'latitude': user.latitude, 'longitude': user.longitude},
        'distance': round(distance, 2),
    }

"""
Haversine Algorithm - Calculate distance between two geographical points
Used to rank donors, hospitals and wilayas by distance from a requester
"""

import math

# Mean radius of the earth in kilometers
EARTH_RADIUS_KM = 6371


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate straight-line distance between two points.
    Note: This is "as the crow flies" distance, not road distance.

    Args:
        lat1, lon1: Latitude and longitude of point 1 (requester)
        lat2, lon2: Latitude and longitude of point 2 (donor)

    Returns:
        Distance in kilometers
    """
    # Convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def bounding_box(latitude, longitude, radius_km):
    """
    Latitude/longitude window that contains every point within radius_km.

    Used to narrow a database query before the exact haversine check.

    Returns:
        Tuple (min_lat, max_lat, min_lon, max_lon)
    """
    lat_delta = math.degrees(radius_km / EARTH_RADIUS_KM)

    cos_lat = math.cos(math.radians(latitude))
    if cos_lat < 1e-6:
        # Window touches a pole: every longitude qualifies
        return latitude - lat_delta, latitude + lat_delta, -180.0, 180.0

    lon_delta = math.degrees(radius_km / (EARTH_RADIUS_KM * cos_lat))
    if lon_delta >= 180:
        return latitude - lat_delta, latitude + lat_delta, -180.0, 180.0

    return (
        latitude - lat_delta,
        latitude + lat_delta,
        longitude - lon_delta,
        longitude + lon_delta,
    )


def within_radius(latitude, longitude, points, radius_km):
    """
    Keep the points that lie within radius_km of the origin.

    Args:
        latitude, longitude: Origin
        points: Iterable of objects with latitude/longitude attributes
        radius_km: Maximum distance in km

    Returns:
        List of tuples: (point, distance) sorted by distance
    """
    nearby = []

    for point in points:
        if point.latitude is None or point.longitude is None:
            continue
        distance = haversine_distance(latitude, longitude, point.latitude, point.longitude)
        if distance <= radius_km:
            nearby.append((point, distance))

    # Closest first
    nearby.sort(key=lambda x: x[1])

    return nearby

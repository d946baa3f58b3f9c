# redhope/pagination.py
from rest_framework.response import Response

from algorithms.ranking import DEFAULT_LIMIT, DEFAULT_PAGE, page_metadata, paginate

MAX_LIMIT = 100


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def get_page_params(request):
    """Read page/limit from the query string; bad values fall back to defaults."""
    page = _positive_int(request.query_params.get('page'), DEFAULT_PAGE)
    limit = min(_positive_int(request.query_params.get('limit'), DEFAULT_LIMIT), MAX_LIMIT)
    return page, limit


def paginated_response(data, total, page, limit, **extra):
    body = {
        'success': True,
        'data': data,
        'pagination': page_metadata(total, page, limit),
    }
    body.update(extra)
    return Response(body)


def paginate_queryset(request, queryset, serializer_class, **extra):
    """Paginate a queryset and serialize the page in one step."""
    page, limit = get_page_params(request)
    result = paginate(queryset, page, limit)
    data = serializer_class(result.items, many=True).data
    return paginated_response(data, result.total, page, limit, **extra)

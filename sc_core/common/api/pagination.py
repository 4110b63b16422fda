# sc_core/common/api/pagination.py
from __future__ import annotations

import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class DefaultPagination(PageNumberPagination):
    page_size = 50
    page_size_query_param = "limit"
    max_page_size = 200

    message = ""

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return Response(
            {
                "success": True,
                "message": self.message,
                "data": data,
                "pagination": {
                    "total": total,
                    "page": self.page.number,
                    "limit": limit,
                    "totalPages": math.ceil(total / limit) if limit else 0,
                },
            }
        )


def paginate(
    request,
    queryset,
    serializer_class,
    *,
    message: str = "",
    paginator: PageNumberPagination | None = None,
) -> Response:
    """
    Shared pagination helper to enforce a stable contract:
      { success, message, data, pagination: { total, page, limit, totalPages } }
    """
    p = paginator or DefaultPagination()
    p.message = message
    page = p.paginate_queryset(queryset, request)
    if page is not None:
        ser = serializer_class(page, many=True)
        return p.get_paginated_response(ser.data)

    ser = serializer_class(queryset, many=True)
    return Response({"success": True, "message": message, "data": ser.data})

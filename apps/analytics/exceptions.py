"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidEntityTypeError
    └── InvalidMetricError
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    Catch it in views to map analytics errors to a 400 response:

        try:
            data = AnalyticsQueries.top_viewed(entity_type='invalid')
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidEntityTypeError(AnalyticsServiceError):
    """
    Raised when an entity type is not tracked.

    Valid types are: place, route, service, news.
    """

    pass


class InvalidMetricError(AnalyticsServiceError):
    """
    Raised when an invalid ranking metric is specified.

    Valid metrics are: views, rating, reviews.
    """

    pass

"""
Domain errors raised by the storefront.

Remote failures are not wrapped: ``postgrest.exceptions.APIError`` and row
validation errors leave the fetchers untouched and are mapped to responses by
the error handlers.
"""

from werkzeug.exceptions import BadRequest, NotFound


class RestaurantNotFound(NotFound):
    """No active restaurant matches the requested slug."""

    def __init__(self, slug: str | None):
        self.slug = slug
        if slug:
            description = f'O restaurante "{slug}" não existe ou está temporariamente indisponível.'
        else:
            description = "Não foi possível encontrar o restaurante solicitado."
        super().__init__(description=description)


class InvalidQuery(BadRequest):
    """Request parameters rejected by their query model."""

    def __init__(self, details: list[dict]):
        self.details = details
        super().__init__(description="Dados inválidos")

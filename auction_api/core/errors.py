"""
Erreurs métier de l'API enchères.

Chaque erreur porte son code HTTP ; le handler de ``main.py`` la transforme
en enveloppe ``{"success": false, "error": ...}``.
"""


class AuctionAPIError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingQueryParameter(AuctionAPIError):
    status_code = 400

    def __init__(self, name: str = "q"):
        super().__init__(f"Search query parameter '{name}' is required")
        self.name = name


class InvalidFilterParameter(AuctionAPIError):
    status_code = 400

    def __init__(self, name: str, value):
        super().__init__(f"Invalid value for '{name}': {value!r}")
        self.name = name
        self.value = value


class NotFound(AuctionAPIError):
    status_code = 404

    def __init__(self, auction_id: str):
        super().__init__("Auction not found")
        self.auction_id = auction_id


class InvalidIdentifier(AuctionAPIError):
    # Contrat existant de l'API : identifiant mal formé -> 500
    status_code = 500

    def __init__(self, auction_id: str):
        super().__init__(f"Invalid auction id: {auction_id}")
        self.auction_id = auction_id

from typing import Optional


class InvalidInputError(ValueError):
    """The input data set is missing a collection, or a collection is empty or malformed."""


class UnresolvedReferenceError(LookupError):
    """A purchase record points at a seller or product that is not in the data set."""


class UnknownSellerError(UnresolvedReferenceError):
    def __init__(self, seller_id: str) -> None:
        self.seller_id = seller_id
        super().__init__(f"Seller '{seller_id}' not found")


class UnknownProductError(UnresolvedReferenceError):
    def __init__(self, sku: str, seller_id: Optional[str] = None) -> None:
        self.sku = sku
        self.seller_id = seller_id
        msg = f"Product '{sku}' not found"
        if seller_id is not None:
            msg += f" (sold by seller '{seller_id}')"
        super().__init__(msg)

"""
Interface definitions using Python Protocols.

Locators and validators are matched structurally: any object with the
right method satisfies the protocol without inheriting from it, so a
test double or an alternative locator can be dropped in freely.

Example usage:
    class PostboxLocator:
        def locate(self, text: str) -> Optional[str]:
            return None

    locator: ILocator = PostboxLocator()
"""

from typing import Protocol, Any, Optional, runtime_checkable


@runtime_checkable
class ILocator(Protocol):
    """
    Protocol for a single-field locator.

    Implementations:
    - AddressLocator: postal address
    - MeterIdLocator: meter-point id (Zählpunktnummer)
    - ConsumptionLocator: current consumption in kWh
    """

    def locate(self, text: str) -> Optional[str]:
        """
        Find the field in raw OCR text.

        Args:
            text: Raw OCR text, possibly empty

        Returns:
            The field value, or None when there is no confident match.
            Must never raise for string input.
        """
        ...


@runtime_checkable
class IValidator(Protocol):
    """
    Protocol defining the contract for validator classes.

    Implementations:
    - DataValidator: validates an extracted invoice record
    """

    def validate(self, data: Any) -> bool:
        """
        Validate data according to the validator's rules.

        Args:
            data: The data to validate

        Returns:
            True if the data is valid, False otherwise. Invalid data must
            not raise.
        """
        ...

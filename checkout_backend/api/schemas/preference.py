from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from checkout_backend.payments.base import Address, Buyer, CartItem, PreferenceRequest

# Quantity and price stay loosely typed here; the preference builder coerces
# them and answers with a ValidationError naming the offending item.
Number = Union[int, float, str]


class CartItemIn(BaseModel):
    name: str = Field(..., validation_alias=AliasChoices("name", "nome", "title"))
    qty: Number = Field(..., validation_alias=AliasChoices("qty", "qtd", "quantity"))
    price: Number = Field(..., validation_alias=AliasChoices("price", "preco", "unit_price"))


class PayerAddressIn(BaseModel):
    zipCode: Optional[str] = Field(None, validation_alias=AliasChoices("zipCode", "zip_code", "cep"))
    streetName: Optional[str] = Field(None, validation_alias=AliasChoices("streetName", "street_name", "rua"))
    streetNumber: Optional[str] = Field(None, validation_alias=AliasChoices("streetNumber", "street_number", "numero"))


class PreferenceCreate(BaseModel):
    items: List[CartItemIn] = Field(..., validation_alias=AliasChoices("items", "itens"))
    payerEmail: str
    payerName: Optional[str] = None
    payerSurname: Optional[str] = None
    payerTaxId: Optional[str] = None
    payerAddress: Optional[PayerAddressIn] = None
    externalReference: Optional[str] = None
    model_config = ConfigDict(str_strip_whitespace=True)

    def to_domain(self) -> PreferenceRequest:
        address = None
        if self.payerAddress:
            address = Address(
                zip_code=self.payerAddress.zipCode,
                street_name=self.payerAddress.streetName,
                street_number=str(self.payerAddress.streetNumber) if self.payerAddress.streetNumber else None,
            )
        return PreferenceRequest(
            items=[CartItem(name=i.name, quantity=i.qty, unit_price=i.price) for i in self.items],
            buyer=Buyer(
                email=self.payerEmail,
                name=self.payerName or None,
                surname=self.payerSurname or None,
                tax_id=self.payerTaxId or None,
                address=address,
            ),
            external_reference=self.externalReference or None,
        )


class PreferenceResponse(BaseModel):
    id: str
    checkoutUrl: str
    externalReference: str

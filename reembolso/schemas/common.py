from pydantic import BaseModel


class ErrorResponse(BaseModel):
    detail: str


class MessageResponse(BaseModel):
    message: str


class InsertedResponse(MessageResponse):
    """Respuesta de creación: identificador del nuevo registro."""
    insertedId: int

import enum


class FieldCode(str, enum.Enum):
    """Field tags attached to errors so clients can map them onto form inputs."""

    GLOBAL = "GLOBAL"
    NOME = "NOME"
    DESCRICAO = "DESCRICAO"
    COR = "COR"
    VALOR = "VALOR"
    MODELO = "MODELO"
    PESO = "PESO"
    ALTURA = "ALTURA"
    COMPRIMENTO = "COMPRIMENTO"
    LARGURA = "LARGURA"
    FABRICANTE = "FABRICANTE"
    FORNECEDOR = "FORNECEDOR"
    SUBCATEGORIA = "SUBCATEGORIA"
    IMGPRINCIPAL = "IMGPRINCIPAL"
    IMAGENS = "IMAGENS"
    DESCONTO = "DESCONTO"
    AVALIACAO = "AVALIACAO"


class CatalogException(Exception):
    status_code = 400

    def __init__(self, message: str, code: FieldCode = FieldCode.GLOBAL):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_detail(self) -> dict:
        return {"code": self.code.value, "message": self.message}


class NotFound(CatalogException):
    status_code = 404


class ValidationError(CatalogException):
    """Missing or out-of-bounds field on register/update."""

    def __init__(self, code: FieldCode, message: str):
        super().__init__(message, code)


class InvalidDiscount(CatalogException):
    def __init__(self, message: str = "Invalid discount, use a whole number between 0 and 99!"):
        super().__init__(message, FieldCode.DESCONTO)


class InvalidRating(CatalogException):
    def __init__(self, message: str = "Rating must be between 1.0 and 5.0"):
        super().__init__(message, FieldCode.AVALIACAO)

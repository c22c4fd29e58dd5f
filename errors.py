"""Errores de contrato del motor de la calculadora."""


class InvalidInputError(ValueError):
    """Argumento estructuralmente inválido (operador, función o unidad desconocidos).

    Señala un error de programación del colaborador que invoca al motor,
    no un estado visible para el usuario.
    """

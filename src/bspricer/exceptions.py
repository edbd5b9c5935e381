class InvalidParameter(ValueError):
    """Raised when a market or contract input fails validation.

    Raised only while building an option (``OptionParameters``,
    ``ValuationEngine`` or the vectorised validators); evaluating an already
    constructed engine never raises it.

    Attributes
    ----------
    field : str
        Name of the offending input: ``"S"``, ``"K"``, ``"T"`` or ``"sigma"``.
    reason : str
        Machine-readable cause:

        - ``"non_positive"`` : spot or strike is ``<= 0``
        - ``"negative"``     : time or volatility is ``< 0``
        - ``"expired"``      : time to maturity is exactly zero
        - ``"zero"``         : volatility is exactly zero
    value : float
        The rejected value.
    """

    def __init__(self, field: str, reason: str, message: str, value: float = float("nan")):
        super().__init__(message)
        self.field = field
        self.reason = reason
        self.value = value

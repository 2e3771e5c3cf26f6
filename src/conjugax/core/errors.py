"""Exceptions raised at the boundary of the conjugate updates and reports."""


class ConjugaxError(ValueError):
    """base class for all conjugax errors"""


class InvalidParameter(ConjugaxError):
    """
    a hyperparameter is out of its domain (non-positive variance, shape or rate),
    a coverage level is outside (0, 1), or prior and posterior families disagree
    """


class InvalidInput(ConjugaxError):
    """
    a sample value lies outside the family support, the sample is not 1-d,
    or a likelihood is requested from an empty sample where it is undefined
    """

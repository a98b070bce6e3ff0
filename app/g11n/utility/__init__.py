"""Consumers of locale data: formatting, numbers, validation and inflection."""

from g11n.utility.format import Format
from g11n.utility.inflector import Inflector
from g11n.utility.number import Number
from g11n.utility.validate import Validate

__all__ = ["Format", "Inflector", "Number", "Validate"]

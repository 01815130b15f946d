from .errors import error_response
from .money import round_money, to_decimal

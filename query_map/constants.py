DEFAULT_CHARSET = "utf-8"
PAIR_SEPARATOR = b"&"
VALUE_SEPARATOR = b"="
AWS_VALUE_SEPARATOR = ","

from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Describes one environment setting a client needs before it can boot.

    Attributes:
        env_key (str): Key suffix of the variable. The client prefixes it with its type and engine, e.g. "STORE_ID" → "STORE_ECWID_STORE_ID".
        val_type (str): Expected value type. Supported types are "string", "number" and "bool".
        default (str | int | bool | None): Fallback if the variable is unset. None marks the setting as required.
    """

    env_key: str
    val_type: str = "string"
    default: str | int | bool | None = None

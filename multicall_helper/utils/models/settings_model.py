from typing import Dict, Optional

from pydantic import BaseModel


class RPCNodeConfig(BaseModel):
    """RPC node configuration model."""

    url: str


class MulticallSettings(BaseModel):
    """Multicall client configuration model."""

    rpc: RPCNodeConfig
    chain_id: Optional[int] = None
    multicall_address: Optional[str] = None


class LoggingConfig(BaseModel):
    """Library-scoped logging configuration model."""

    log_dir: Optional[str] = None
    file_levels: Dict[str, bool] = {
        'INFO': True,
        'WARNING': True,
        'ERROR': True,
        'CRITICAL': True,
    }
    console_levels: Dict[str, str] = {
        'INFO': 'stdout',
        'WARNING': 'stderr',
        'ERROR': 'stderr',
        'CRITICAL': 'stderr',
    }
    enable_console_logging: bool = False
    format: str = '{time:MMMM D, YYYY > HH:mm:ss!UTC} | {level} | {extra[module]} | {message}'
    rotation: str = '6 hours'
    retention: str = '2 days'
    compression: str = 'tar.xz'

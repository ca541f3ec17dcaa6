"""HTTP clients for Kakao Local, the SEMAS store registry and Bizinfo."""

from .bizinfo import BizinfoClient
from .kakao import KakaoLocalClient
from .semas import SemasStoreClient

__all__ = ["BizinfoClient", "KakaoLocalClient", "SemasStoreClient"]

from .jwt_token_codec import JWTTokenCodec, TokenCodecConfig

__all__ = ["JWTTokenCodec", "TokenCodecConfig"]

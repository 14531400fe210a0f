from .schemas import UploadImageResponse, DeleteImageResponse, ErrorResponse

__all__ = ['UploadImageResponse', 'DeleteImageResponse', 'ErrorResponse']

from design_api.client.session import UploadSession
from design_api.client.state import ClientState

__all__ = ["ClientState", "UploadSession"]

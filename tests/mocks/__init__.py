from mocks.mock_transport import MockTransport, RecordedRequest

__all__ = ["MockTransport", "RecordedRequest"]

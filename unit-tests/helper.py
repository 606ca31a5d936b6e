from typing import Any, List


class PasApiHelper:
    _expected_requests = []     # type: List[Any]
    _requested_urls = []        # type: List[str]
    _timeouts = []              # type: List[Any]

    @staticmethod
    def invoke_expect(actions):
        # type: (list) -> None
        PasApiHelper._expected_requests.clear()
        PasApiHelper._expected_requests.extend(actions)
        PasApiHelper._requested_urls.clear()
        PasApiHelper._timeouts.clear()

    @staticmethod
    def is_expect_empty():
        # type: () -> bool
        return len(PasApiHelper._expected_requests) == 0

    @staticmethod
    def requested_urls():
        # type: () -> List[str]
        return list(PasApiHelper._requested_urls)

    @staticmethod
    def timeouts():
        return list(PasApiHelper._timeouts)

    @staticmethod
    def invoke_rest(_, url, method='GET', timeout=None):
        # type: (Any, str, str, Any) -> Any
        PasApiHelper._requested_urls.append(url)
        PasApiHelper._timeouts.append(timeout)
        action = PasApiHelper._expected_requests.pop(0)

        if isinstance(action, Exception):
            raise action
        if callable(action):
            return action(url)
        return action

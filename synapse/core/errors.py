"""코어 예외"""


class SynapseError(Exception):
    """게임 코어 공통 예외"""


class SnapshotError(SynapseError):
    """스냅샷 읽기/쓰기/해석 실패 (세션은 기존 메모리 상태로 계속)"""


class SessionOverError(SynapseError):
    """엔딩 또는 종료 후 세션에 명령을 보냈을 때"""

from abc import ABC, abstractmethod

class IUnitOfWork(ABC):
    """
    하나의 서비스 작업을 하나의 트랜잭션으로 묶습니다.

    with 블록이 정상 종료되면 commit, 예외가 발생하면 rollback 합니다.
    저장소의 제약 조건 위반은 서비스 예외(ServiceError)로 변환되어 전달됩니다.
    """

    @abstractmethod
    def __enter__(self) -> "IUnitOfWork":
        pass

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    @abstractmethod
    def commit(self):
        """현재 트랜잭션을 커밋합니다."""
        pass

    @abstractmethod
    def rollback(self):
        """현재 트랜잭션을 롤백합니다."""
        pass

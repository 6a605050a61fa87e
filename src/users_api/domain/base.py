import abc


class IDomain(abc.ABC):
    pass

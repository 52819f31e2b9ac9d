import logging

from logparams.utils.log_context import get_request_id


class ClassMethodFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # logparams.params.service -> service.emit
        module_name = record.name.rsplit(".", 1)[-1] or "?"
        record.class_method = f"{module_name}.{record.funcName}"
        return True


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # An explicit extra={"request_id": ...} wins over the context value
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id()
        return True

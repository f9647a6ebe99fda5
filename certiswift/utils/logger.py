"""
Colored console logging and the function-call logging decorator
"""
import os
import logging
import colorlog
import functools
import inspect
import time


class CustomLogger:
    """
    Custom logger class to handle detailed function logging with terminal output only
    """
    def __init__(self, name='DetailedLogger'):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        # Has its own handler; keep records away from the root handler
        self.logger.propagate = False

        # Create console handler with color formatting
        if not self.logger.handlers:
            console_handler = colorlog.StreamHandler()
            console_handler.setLevel(logging.DEBUG)

            console_formatter = colorlog.ColoredFormatter(
                "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s "
                "%(blue)s%(name)s %(bold_white)s%(funcName)s:%(lineno)d%(reset)s - "
                "%(message_log_color)s%(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors={
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                },
                secondary_log_colors={
                    'message': {
                        'DEBUG': 'cyan',
                        'INFO': 'white',
                        'WARNING': 'yellow',
                        'ERROR': 'red',
                        'CRITICAL': 'red,bg_white',
                    }
                }
            )

            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

    def log_function_call(self, func):
        """Decorator to log function calls with timing and parameters"""
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__qualname__
            file_name = inspect.getfile(func)

            caller_frame = inspect.currentframe().f_back
            caller_info = ""
            if caller_frame:
                caller_info = f"called from {caller_frame.f_code.co_name} at line {caller_frame.f_lineno}"

            self.logger.info(
                f"→ Entering {func_name} "
                f"[{os.path.basename(file_name)}] {caller_info}"
            )

            # Skip the bound instance when reporting parameters
            shown_args = args[1:] if args and hasattr(args[0], func.__name__) else args
            if shown_args or kwargs:
                params = []
                if shown_args:
                    params.append(f"args: {shown_args}")
                if kwargs:
                    params.append(f"kwargs: {kwargs}")
                self.logger.debug(f"Parameters: {', '.join(params)}")

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                execution_time = (time.time() - start_time) * 1000

                self.logger.info(
                    f"← Completed {func_name} in {execution_time:.2f}ms"
                )
                return result

            except Exception as e:
                execution_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"✕ Error in {func_name} after {execution_time:.2f}ms: "
                    f"{str(e)}", exc_info=True
                )
                raise

        return wrapper


def setup_logging(level=logging.INFO):
    """Configure colored logging on the root logger"""
    logger = logging.getLogger()
    logger.setLevel(level)
    if not any(isinstance(h.formatter, colorlog.ColoredFormatter) for h in logger.handlers):
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s%(reset)s"
        ))
        logger.addHandler(handler)


# Shared instance used by services and the entry point
custom_logger = CustomLogger()

"""
Exception hierarchy shared by the target_locator modules.

Classes:
    TargetLocatorError: Base exception for all target_locator errors
    TargetConfigError: Configuration that cannot be loaded or is invalid

Note:
    A missing target is a normal outcome and is never reported with an
    exception. Solvers return records with has_solution=False instead.
"""


def tested(func):
    """
    Decorator that marks a function or method as tested by adding a
    'tested' attribute set to True.

    This can be used to programmatically check whether a function has
    been confirmed to work as expected.

    Args:
        func (callable): The function or method to mark as tested.

    Returns:
        callable: The original function with a 'tested' attribute.

    Usage:
        @tested
        def my_function():
            pass

        # Later, check if the method is tested:
        if hasattr(my_function, 'tested'):
            print("Function is tested!")
    """

    func.tested = True
    return func


class TargetLocatorError(Exception):
    """
    Base exception for all target_locator errors.

    Catch this to handle any target_locator specific error
    generically.

    Example:
        try:
            config = LocatorConfig.load("config.json")
        except TargetLocatorError as e:
            print(f"Target locator error: {e}")
    """

    @tested
    def __init__(self, message: str) -> None:
        """
        Initialise the TargetLocatorError with a descriptive message.

        Args:
            message (str): Error description
        """

        super().__init__(message)


class TargetConfigError(TargetLocatorError):
    """
    Exception raised when a configuration cannot be used.

    Raised when:
        - The configuration file cannot be opened or parsed
        - A required key is missing
        - A value has the wrong type or is out of range
    """

    @tested
    def __init__(self, message: str) -> None:
        super().__init__(message)

"""
Dynamic Function Loader for MapReduce job files
Loads user-provided Python modules containing map and reduce functions
"""

import importlib.util
import os
import uuid

# Accepted names, in lookup order
MAP_FUNCTION_NAMES = ('map_function', 'map_fn')
REDUCE_FUNCTION_NAMES = ('reduce_function', 'reduce_fn')


class FunctionLoader:
    """Dynamically loads user-provided map/reduce functions from Python files"""

    def __init__(self, job_file: str):
        """
        Initialize the function loader

        Args:
            job_file: Path to user's Python file containing map/reduce functions
        """
        self.job_file = job_file
        self.module = None

    def load_module(self):
        """
        Dynamically load user-provided module

        Returns:
            The loaded module object

        Raises:
            FileNotFoundError: If the job file doesn't exist
            ImportError: If the file cannot be loaded as a Python module
        """
        if not os.path.exists(self.job_file):
            raise FileNotFoundError(f"Job file not found: {self.job_file}")

        module_name = f"localmr_job_{uuid.uuid4().hex[:8]}"
        spec = importlib.util.spec_from_file_location(module_name, self.job_file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Failed to load job file: {self.job_file}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        self.module = module
        return module

    def _find(self, names):
        if not self.module:
            self.load_module()

        for name in names:
            if hasattr(self.module, name):
                return getattr(self.module, name)
        return None

    def get_map_function(self):
        """
        Get map function from loaded module

        Raises:
            AttributeError: If module defines neither 'map_function' nor 'map_fn'
        """
        func = self._find(MAP_FUNCTION_NAMES)
        if func is None:
            raise AttributeError("Job file must define 'map_function' or 'map_fn'")
        return func

    def get_reduce_function(self):
        """
        Get reduce function from loaded module

        Raises:
            AttributeError: If module defines neither 'reduce_function' nor 'reduce_fn'
        """
        func = self._find(REDUCE_FUNCTION_NAMES)
        if func is None:
            raise AttributeError("Job file must define 'reduce_function' or 'reduce_fn'")
        return func

    def describe(self) -> dict:
        """Report which of the accepted function names the job file defines."""
        return {
            'map': next((n for n in MAP_FUNCTION_NAMES if self._find((n,))), None),
            'reduce': next((n for n in REDUCE_FUNCTION_NAMES if self._find((n,))), None),
        }

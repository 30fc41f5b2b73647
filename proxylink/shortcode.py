"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short codes for proxied links.
    
    Codes are identifiers, not security tokens, so the module-level
    ``random`` generator is good enough here.
    """
    
    # Lowercase letters and digits (36 symbols)
    ALPHABET = string.ascii_lowercase + string.digits
    
    def __init__(self, default_length: int = 6):
        """Initialize short code generator.
        
        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError(f"Code length must be positive (given value: {default_length})")
        self.default_length = default_length
    
    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.
        
        Every character is drawn independently and uniformly (with
        replacement) from ALPHABET.
        
        Args:
            length: Length of the code (uses default if not specified)
            
        Returns:
            Random short code
        """
        if length is None:
            length = self.default_length
        if length < 1:
            raise ValueError(f"Code length must be positive (given value: {length})")
        return ''.join(random.choices(self.ALPHABET, k=length))
    
    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code only uses characters from the alphabet.
        
        Args:
            code: Code to validate
            
        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.ALPHABET for c in code)

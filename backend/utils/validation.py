import re

class ValidationError(ValueError):
    pass

class InputValidator:
    
    XSS_PATTERNS = [
        re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL),
        re.compile(r"javascript:", re.IGNORECASE),
        re.compile(r"on\w+\s*=", re.IGNORECASE),
        re.compile(r"<iframe", re.IGNORECASE),
    ]
    
    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    MAX_STATEMENT_LENGTH = 5000
    MAX_CONTEXT_LENGTH = 5000
    
    @staticmethod
    def sanitize_statement(statement: str) -> str:
        if not statement:
            raise ValidationError("Statement cannot be empty")
        
        statement = statement.strip()
        
        if len(statement) < 3:
            raise ValidationError("Statement must be at least 3 characters long")
        
        if len(statement) > InputValidator.MAX_STATEMENT_LENGTH:
            raise ValidationError("Statement cannot exceed 5000 characters")
        
        for pattern in InputValidator.XSS_PATTERNS:
            if pattern.search(statement):
                raise ValidationError("Statement contains suspicious HTML/JavaScript patterns")
        
        statement = InputValidator.CONTROL_CHARS_PATTERN.sub('', statement)
        
        statement = re.sub(r'\s+', ' ', statement)
        
        return statement

    @staticmethod
    def sanitize_context(context: str) -> str:
        if not context:
            return ""
        
        context = str(context).strip()
        
        if len(context) > InputValidator.MAX_CONTEXT_LENGTH:
            context = context[:InputValidator.MAX_CONTEXT_LENGTH]
        
        context = InputValidator.CONTROL_CHARS_PATTERN.sub('', context)
        
        return re.sub(r'\s+', ' ', context)

DEFAULT_REGISTER_COUNT = 8
DEFAULT_IN_PROMPT = 'Input an integer: '

PC_MARKER = '>>>>'          # Listing line at the current pc
ADDRESS_WIDTH = len(PC_MARKER)

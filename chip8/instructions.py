""" Object representation of opcodes, and functions to handle the actual instructions

    Every CHIP-8 instruction is a single big-endian 16-bit word. Decoding turns the word into an
    Instruction (an Opcode plus its operand fields). Each opcode has a handler that is passed the
    machine and the Instruction, applies any register/screen changes, and returns an action object
    telling the machine how to move the program counter.

    See http://devernay.free.fr/hacks/chip8/C8TECH10.HTM for a summary of the instruction set.
"""
from collections import namedtuple
from enum import Enum

HEX_DIGITS = '0123456789ABCDEF'

FLAG_REGISTER = 0xF

### Constants and utilities
class InstructionException(Exception):
    pass

class Opcode(Enum):
    """ Supported opcodes. The value is the encoding: hex digits are fixed, X/Y are register
        indices, NN is an 8-bit immediate and NNN a 12-bit address """
    nop      = '0000'
    cls      = '00E0'
    ret      = '00EE'
    jp       = '1NNN'
    call     = '2NNN'
    se_byte  = '3XNN'
    sne_byte = '4XNN'
    se_reg   = '5XY0'
    ld_byte  = '6XNN'
    add_byte = '7XNN'
    ld_reg   = '8XY0'
    or_reg   = '8XY1'
    and_reg  = '8XY2'
    xor_reg  = '8XY3'
    add_reg  = '8XY4'

class OperandKind(Enum):
    """ Declared with opcode handlers to give hints on how to display operands """
    register_x = 1
    register_y = 2
    byte = 3
    address = 4

Instruction = namedtuple('Instruction', ['opcode', 'word', 'x', 'y', 'nn', 'nnn'])

def nibbles(word):
    """ Split a word into its four 4-bit fields, most significant first """
    return ((word & 0xF000) >> 12,
            (word & 0x0F00) >> 8,
            (word & 0x00F0) >> 4,
            word & 0x000F)

def pattern_from_encoding(encoding):
    """ Turn an encoding such as '8XY4' into a (mask, value) pair that matches it """
    mask = 0
    value = 0
    for ch in encoding:
        mask <<= 4
        value <<= 4
        if ch in HEX_DIGITS:
            mask |= 0xF
            value |= int(ch,16)
    return mask, value

def _fixed_nibbles(opcode):
    return sum(1 for ch in opcode.value if ch in HEX_DIGITS)

# Most specific patterns first, so 00EE is matched before anything looser in the 0 family
DECODE_TABLE = sorted([(pattern_from_encoding(opcode.value), opcode) for opcode in Opcode],
                      key=lambda entry: -_fixed_nibbles(entry[1]))

def decode(word):
    """ Decode the 16-bit word into an Instruction. Raises InstructionException if no opcode matches """
    if word < 0 or word > 0xFFFF:
        raise InstructionException('Instruction word %r is not a 16-bit value' % word)

    for (mask, value), opcode in DECODE_TABLE:
        if word & mask == value:
            _, x, y, _ = nibbles(word)
            return Instruction(opcode, word, x, y, word & 0xFF, word & 0xFFF)

    raise InstructionException('Unknown opcode 0x%04x' % word)

### Passed in memory and the address of an instruction, return a handler function (taking a machine),
### a description of the instruction and the address of the following instruction
def read_instruction(memory,address):
    """ Read the instruction at the given address without executing it """
    instruction = decode(memory.word(address))
    handler = OPCODE_HANDLERS[instruction.opcode]['handler']
    handler_f = lambda machine: handler(machine, instruction)
    return handler_f, format_description(instruction), address+2

def format_operand(instruction,kind):
    if kind == OperandKind.register_x:
        return 'V%X' % instruction.x
    elif kind == OperandKind.register_y:
        return 'V%X' % instruction.y
    elif kind == OperandKind.byte:
        return '0x%02x' % instruction.nn
    return '0x%03x' % instruction.nnn

def format_description(instruction):
    """ Create an assembler-style text description of this instruction """
    handler = OPCODE_HANDLERS[instruction.opcode]
    description = handler['name']
    operands = [format_operand(instruction,kind) for kind in handler.get('types',())]
    if operands:
        description += ' ' + ', '.join(operands)
    return description

### For testing purposes. Pass in an opcode and its fields and get back the two bytes that encode it
def create_instruction(opcode, x=0, y=0, nn=0, nnn=0):
    encoding = opcode.value
    mask, word = pattern_from_encoding(encoding)
    if 'X' in encoding:
        word |= (x & 0xF) << 8
    if 'Y' in encoding:
        word |= (y & 0xF) << 4
    if encoding.endswith('NNN'):
        word |= nnn & 0xFFF
    elif encoding.endswith('NN'):
        word |= nn & 0xFF
    return bytes([word >> 8, word & 0xFF])

### Machine actions, returned at end of each instruction to tell the machine how to proceed.
### Fetching has already moved the program counter past the instruction.
class NextInstructionAction(object):
    """ Machine should proceed to the next instruction """
    def apply(self,machine):
        pass

class SkipAction(object):
    """ Machine should skip over the next instruction """
    def apply(self,machine):
        machine.pc = (machine.pc + 2) & 0xFFFF

class JumpAction(object):
    """ Machine should continue at the given address """
    def __init__(self, address):
        self.address = address

    def apply(self,machine):
        machine.pc = self.address

class CallAction(object):
    """ Machine should push the address of the next instruction and jump to the subroutine """
    def __init__(self, address):
        self.address = address

    def apply(self,machine):
        machine.stack.push(machine.pc)
        machine.pc = self.address

class ReturnAction(object):
    """ Machine should continue at the address on top of the call stack """
    def apply(self,machine):
        machine.pc = machine.stack.pop()

###
### All handlers are passed in a machine and the decoded instruction
### and return an action object telling the machine how to proceed
###

def skip_if(condition):
    if condition:
        return SkipAction()
    return NextInstructionAction()

## Flow control
def op_nop(machine,instruction):
    return NextInstructionAction()

def op_ret(machine,instruction):
    return ReturnAction()

def op_jp(machine,instruction):
    return JumpAction(instruction.nnn)

def op_call(machine,instruction):
    return CallAction(instruction.nnn)

def op_se_byte(machine,instruction):
    return skip_if(machine.registers[instruction.x] == instruction.nn)

def op_sne_byte(machine,instruction):
    return skip_if(machine.registers[instruction.x] != instruction.nn)

def op_se_reg(machine,instruction):
    return skip_if(machine.registers[instruction.x] == machine.registers[instruction.y])

## Display
def op_cls(machine,instruction):
    machine.clear_screen()
    return NextInstructionAction()

## Registers
def op_ld_byte(machine,instruction):
    machine.registers[instruction.x] = instruction.nn
    return NextInstructionAction()

def op_add_byte(machine,instruction):
    # No carry flag for the immediate form
    registers = machine.registers
    registers[instruction.x] = (registers[instruction.x] + instruction.nn) & 0xFF
    return NextInstructionAction()

def op_ld_reg(machine,instruction):
    machine.registers[instruction.x] = machine.registers[instruction.y]
    return NextInstructionAction()

def op_add_reg(machine,instruction):
    registers = machine.registers
    total = registers[instruction.x] + registers[instruction.y]
    registers[instruction.x] = total & 0xFF
    # Flag is written last, so with X == F the register ends up holding the carry
    registers[FLAG_REGISTER] = 1 if total > 0xFF else 0
    return NextInstructionAction()

### Bitwise
def op_or(machine,instruction):
    registers = machine.registers
    registers[instruction.x] = registers[instruction.x] | registers[instruction.y]
    return NextInstructionAction()

def op_and(machine,instruction):
    registers = machine.registers
    registers[instruction.x] = registers[instruction.x] & registers[instruction.y]
    return NextInstructionAction()

def op_xor(machine,instruction):
    registers = machine.registers
    registers[instruction.x] = registers[instruction.x] ^ registers[instruction.y]
    return NextInstructionAction()

OPCODE_HANDLERS = {
Opcode.nop:      {'name': 'NOP', 'handler': op_nop},
Opcode.cls:      {'name': 'CLS', 'handler': op_cls},
Opcode.ret:      {'name': 'RET', 'handler': op_ret},
Opcode.jp:       {'name': 'JP',   'types': (OperandKind.address,), 'handler': op_jp},
Opcode.call:     {'name': 'CALL', 'types': (OperandKind.address,), 'handler': op_call},
Opcode.se_byte:  {'name': 'SE',   'types': (OperandKind.register_x,OperandKind.byte), 'handler': op_se_byte},
Opcode.sne_byte: {'name': 'SNE',  'types': (OperandKind.register_x,OperandKind.byte), 'handler': op_sne_byte},
Opcode.se_reg:   {'name': 'SE',   'types': (OperandKind.register_x,OperandKind.register_y), 'handler': op_se_reg},
Opcode.ld_byte:  {'name': 'LD',   'types': (OperandKind.register_x,OperandKind.byte), 'handler': op_ld_byte},
Opcode.add_byte: {'name': 'ADD',  'types': (OperandKind.register_x,OperandKind.byte), 'handler': op_add_byte},
Opcode.ld_reg:   {'name': 'LD',   'types': (OperandKind.register_x,OperandKind.register_y), 'handler': op_ld_reg},
Opcode.or_reg:   {'name': 'OR',   'types': (OperandKind.register_x,OperandKind.register_y), 'handler': op_or},
Opcode.and_reg:  {'name': 'AND',  'types': (OperandKind.register_x,OperandKind.register_y), 'handler': op_and},
Opcode.xor_reg:  {'name': 'XOR',  'types': (OperandKind.register_x,OperandKind.register_y), 'handler': op_xor},
Opcode.add_reg:  {'name': 'ADD',  'types': (OperandKind.register_x,OperandKind.register_y), 'handler': op_add_reg},
}

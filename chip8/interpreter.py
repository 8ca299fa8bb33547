""" See http://devernay.free.fr/hacks/chip8/C8TECH10.HTM for a definition of the CHIP-8 VM
    Fetch, decode and execute live here, the instruction set lives in chip8.instructions
"""
import logging

from chip8.memory import Memory,FONTSET,FONT_ADDRESS
from chip8.instructions import read_instruction,decode,format_description,OPCODE_HANDLERS

logger = logging.getLogger(__name__)

# Programs are loaded at, and start executing from, this address
ENTRY_ADDRESS = 0x200

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

NUM_REGISTERS = 16
NUM_KEYS = 16
STACK_SIZE = 16

class InterpreterException(Exception):
    """ General exception in handling by the interpreter """
    pass

class StackOverflowException(InterpreterException):
    """ Thrown when a program nests subroutine calls deeper than the call stack """
    pass

class StackUnderflowException(InterpreterException):
    """ Thrown when a program returns without a matching call """
    pass

class QuitException(Exception):
    """ Thrown when its time to quit the program """
    pass

class Speaker(object):
    """ Abstraction of the sound hardware. The machine calls beep() when the sound timer runs out """
    def beep(self):
        pass

class CallStack(object):
    """ Fixed depth stack of return addresses """
    def __init__(self,size=STACK_SIZE):
        self.entries = [0] * size
        self.pointer = 0

    def push(self,address):
        if self.pointer >= len(self.entries):
            raise StackOverflowException('Call stack overflow pushing 0x%04x (depth %d)' % (address,len(self.entries)))
        self.entries[self.pointer] = address
        self.pointer += 1

    def pop(self):
        if self.pointer == 0:
            raise StackUnderflowException('Cannot return with an empty call stack')
        self.pointer -= 1
        return self.entries[self.pointer]

    def peek(self):
        if self.pointer:
            return self.entries[self.pointer-1]
        return None

    def clear(self):
        self.entries = [0] * len(self.entries)
        self.pointer = 0

    def __len__(self):
        return self.pointer

class Chip8(object):
    """ Contains the entirety of the state of the machine: memory, registers, call stack, timers,
        the framebuffer and the keypad.

        The host drives the machine by calling tick() to run a single instruction and, on a separate
        60Hz schedule, tick_timers(). Input collaborators set keys with keypress(); renderers read
        framebuffer directly.
    """
    def __init__(self,speaker=None):
        self.speaker = speaker or Speaker()
        self.memory = Memory()
        self.stack = CallStack()
        self.reset()

    def reset(self):
        """ Restore the machine to its power-on state. Any loaded program is cleared from memory """
        self.pc = ENTRY_ADDRESS
        self.memory.clear()
        self.memory.load(FONTSET, FONT_ADDRESS)
        self.registers = [0] * NUM_REGISTERS
        self.address_register = 0
        self.stack.clear()
        self.framebuffer = [False] * (SCREEN_WIDTH * SCREEN_HEIGHT)
        self.keys = [False] * NUM_KEYS
        self.delay_timer = 0
        self.sound_timer = 0
        self.last_instruction = None

    @property
    def stack_pointer(self):
        return self.stack.pointer

    def fetch(self):
        """ Return the word at the program counter and move the program counter past it """
        word = self.memory.word(self.pc)
        self.pc = (self.pc + 2) & 0xFFFF
        return word

    def execute(self,word):
        """ Decode and apply the instruction word. Unknown words raise InstructionException """
        instruction = decode(word)
        self.last_instruction = format_description(instruction)
        handler = OPCODE_HANDLERS[instruction.opcode]['handler']
        action = handler(self,instruction)
        action.apply(self)

    def tick(self):
        """ Fetch and execute a single instruction """
        address = self.pc
        word = self.fetch()
        self.execute(word)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('%04x: %04x %s', address, word, self.last_instruction)

    def tick_timers(self):
        """ Count the delay and sound timers down by one. Called at 60Hz by the host """
        if self.delay_timer > 0:
            self.delay_timer -= 1

        if self.sound_timer > 0:
            if self.sound_timer == 1:
                self.speaker.beep()
            self.sound_timer -= 1

    def keypress(self,index,pressed):
        """ Record the state of one of the 16 keys """
        if index < 0 or index >= NUM_KEYS:
            raise InterpreterException('Key %d is out of range 0 to %d' % (index,NUM_KEYS-1))
        self.keys[index] = bool(pressed)

    def clear_screen(self):
        for i in range(0,len(self.framebuffer)):
            self.framebuffer[i] = False

    def pixel(self,x,y):
        """ Return True if the pixel at column x, row y is lit """
        return self.framebuffer[(y * SCREEN_WIDTH) + x]

    def framebuffer_rows(self):
        """ Return the framebuffer as a list of rows """
        return [self.framebuffer[row*SCREEN_WIDTH:(row+1)*SCREEN_WIDTH] for row in range(0,SCREEN_HEIGHT)]

    def instruction_at(self,address):
        """ Return the handler, description and next address for the instruction at the given address """
        return read_instruction(self.memory,address)

    def current_instruction(self):
        """ Return the current instruction """
        return self.instruction_at(self.pc)

    def instructions(self,how_many):
        """ Return how_many (description, address) pairs starting at the current instruction """
        instructions = []
        address = self.pc

        for i in range(0,how_many):
            handler_f,description,next_address = self.instruction_at(address)
            instructions.append((description,address))
            address = next_address

        return instructions

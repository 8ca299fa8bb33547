""" Tests for the CHIP-8 machine and the pieces of the terps that don't need a display """
import unittest
import os
import tempfile
import io
import logging
import curses.ascii

from chip8.interpreter import Chip8,CallStack,Speaker,InterpreterException,StackOverflowException,\
                              StackUnderflowException,ENTRY_ADDRESS,SCREEN_WIDTH,SCREEN_HEIGHT,STACK_SIZE
from chip8.memory import MemoryException,FONTSET,FONTSET_SIZE
from chip8.instructions import Opcode,InstructionException,create_instruction
from chip8.rom import Rom,RomFileException

from generic_terp import SETTINGS,ConfigException,Tracer,build_settings,key_for_char,load_machine,\
                         restart_machine,render_text
from curses_terp import CursesKeypad,half_block_lines,FULL_BLOCK,UPPER_HALF,LOWER_HALF
from dump import disassemble
from terp import Terp as PlayerTerp,RunState as PlayerRunState
from pygame_terp import PygameUI
from debug import Terp as DebugTerp,RunState as DebugRunState,main as debug_main

class TestSpeaker(Speaker):
    def __init__(self):
        self.beeps = 0

    def beep(self):
        self.beeps += 1

def load_program(machine,*words):
    """ Write the instruction words into memory starting at the entry address """
    address = ENTRY_ADDRESS
    for word in words:
        machine.memory.set_word(address,word)
        address += 2

class CallStackTests(unittest.TestCase):
    def test_push_pop(self):
        stack = CallStack()
        self.assertEqual(0, len(stack))
        self.assertEqual(None, stack.peek())
        stack.push(0x202)
        stack.push(0x304)
        self.assertEqual(2, len(stack))
        self.assertEqual(0x304, stack.peek())
        self.assertEqual(0x304, stack.pop())
        self.assertEqual(0x202, stack.pop())
        self.assertEqual(0, stack.pointer)

    def test_overflow(self):
        stack = CallStack()
        for i in range(0,STACK_SIZE):
            stack.push(i)
        self.assertRaises(StackOverflowException, stack.push, 0x200)
        self.assertEqual(STACK_SIZE, len(stack))

    def test_underflow(self):
        stack = CallStack()
        self.assertRaises(StackUnderflowException, stack.pop)
        self.assertEqual(0, stack.pointer)

class MachineStateTests(unittest.TestCase):
    def test_initial_state(self):
        machine = Chip8()
        self.assertEqual(ENTRY_ADDRESS, machine.pc)
        self.assertEqual(0x200, machine.pc)
        self.assertEqual(bytearray(FONTSET), machine.memory[0:FONTSET_SIZE])
        self.assertEqual(bytearray(4096-FONTSET_SIZE), machine.memory[FONTSET_SIZE:4096])
        self.assertEqual([0]*16, machine.registers)
        self.assertEqual(0, machine.address_register)
        self.assertEqual(0, machine.stack_pointer)
        self.assertEqual(SCREEN_WIDTH*SCREEN_HEIGHT, len(machine.framebuffer))
        self.assertFalse(any(machine.framebuffer))
        self.assertEqual([False]*16, machine.keys)
        self.assertEqual(0, machine.delay_timer)
        self.assertEqual(0, machine.sound_timer)

    def test_reset(self):
        machine = Chip8()
        load_program(machine,0x2300)
        machine.tick()
        machine.memory[0] = 0
        machine.registers[3] = 9
        machine.address_register = 0x123
        machine.framebuffer[5] = True
        machine.keypress(4,True)
        machine.delay_timer = 10
        machine.sound_timer = 20

        machine.reset()
        self.assertEqual(ENTRY_ADDRESS, machine.pc)
        self.assertEqual(bytearray(FONTSET), machine.memory[0:FONTSET_SIZE])
        self.assertEqual(0, machine.memory[ENTRY_ADDRESS])
        self.assertEqual([0]*16, machine.registers)
        self.assertEqual(0, machine.address_register)
        self.assertEqual(0, machine.stack_pointer)
        self.assertFalse(any(machine.framebuffer))
        self.assertFalse(any(machine.keys))
        self.assertEqual(0, machine.delay_timer)
        self.assertEqual(0, machine.sound_timer)

    def test_keypress(self):
        machine = Chip8()
        machine.keypress(0xF,True)
        self.assertTrue(machine.keys[0xF])
        machine.keypress(0xF,False)
        self.assertFalse(machine.keys[0xF])
        self.assertRaises(InterpreterException, machine.keypress, 16, True)
        self.assertRaises(InterpreterException, machine.keypress, -1, True)

    def test_pixel(self):
        machine = Chip8()
        machine.framebuffer[SCREEN_WIDTH + 3] = True
        self.assertTrue(machine.pixel(3,1))
        self.assertFalse(machine.pixel(1,3))
        rows = machine.framebuffer_rows()
        self.assertEqual(SCREEN_HEIGHT, len(rows))
        self.assertTrue(rows[1][3])

    def test_fetch(self):
        machine = Chip8()
        load_program(machine,0xABCD)
        self.assertEqual(0xABCD, machine.fetch())
        self.assertEqual(0x202, machine.pc)

    def test_fetch_out_of_bounds(self):
        machine = Chip8()
        machine.pc = 0xFFF
        self.assertRaises(MemoryException, machine.tick)

        # Last full word in memory is a no-op, the one after is past the end
        machine.pc = 0xFFE
        machine.tick()
        self.assertEqual(0x1000, machine.pc)
        self.assertRaises(MemoryException, machine.tick)

    def test_instructions(self):
        machine = Chip8()
        load_program(machine,0x6005,0x7001,0x00EE)
        self.assertEqual([('LD V0, 0x05',0x200),('ADD V0, 0x01',0x202),('RET',0x204)], machine.instructions(3))
        handler_f,description,next_address = machine.current_instruction()
        self.assertEqual('LD V0, 0x05', description)
        self.assertEqual(0x202, next_address)

class ExecutionTests(unittest.TestCase):
    def setUp(self):
        self.machine = Chip8()

    def test_load_immediate_scenario(self):
        load_program(self.machine,0x6005)
        self.machine.tick()
        self.assertEqual(5, self.machine.registers[0])
        self.assertEqual(ENTRY_ADDRESS+2, self.machine.pc)
        self.assertEqual('LD V0, 0x05', self.machine.last_instruction)

    def test_load_immediate_every_register(self):
        for x in range(0,16):
            machine = Chip8()
            machine.memory.load(create_instruction(Opcode.ld_byte,x=x,nn=0xA0+x),ENTRY_ADDRESS)
            machine.tick()
            self.assertEqual(0xA0+x, machine.registers[x])

    def test_clear_screen_scenario(self):
        self.machine.framebuffer = [True] * (SCREEN_WIDTH*SCREEN_HEIGHT)
        load_program(self.machine,0x00E0)
        self.machine.tick()
        self.assertEqual([False] * (SCREEN_WIDTH*SCREEN_HEIGHT), self.machine.framebuffer)
        self.assertEqual(0x202, self.machine.pc)

    def test_nop(self):
        self.machine.registers[1] = 7
        self.machine.tick()
        self.assertEqual(0x202, self.machine.pc)
        self.assertEqual(7, self.machine.registers[1])
        self.assertEqual(0, self.machine.stack_pointer)

    def test_unknown_instruction(self):
        load_program(self.machine,0xA123)
        self.assertRaises(InstructionException, self.machine.tick)
        machine = Chip8()
        load_program(machine,0x0123)
        self.assertRaises(InstructionException, machine.tick)

    def test_jump(self):
        load_program(self.machine,0x1ABC)
        self.machine.tick()
        self.assertEqual(0xABC, self.machine.pc)
        self.assertEqual(0, self.machine.stack_pointer)

    def test_call_and_return(self):
        load_program(self.machine,0x2206,0x0000,0x0000,0x00EE)
        self.machine.tick()
        self.assertEqual(0x206, self.machine.pc)
        self.assertEqual(1, self.machine.stack_pointer)
        self.assertEqual(0x202, self.machine.stack.peek())

        self.machine.tick()
        self.assertEqual(0x202, self.machine.pc)
        self.assertEqual(0, self.machine.stack_pointer)

    def test_nested_calls(self):
        # 0x200: CALL 0x204 / 0x204: CALL 0x20a / 0x20a: RET / 0x206: RET
        load_program(self.machine,0x2204,0x0000,0x220A,0x00EE,0x0000,0x00EE)
        self.machine.tick()
        self.machine.tick()
        self.assertEqual(0x20A, self.machine.pc)
        self.assertEqual(2, self.machine.stack_pointer)
        self.machine.tick()
        self.assertEqual(0x206, self.machine.pc)
        self.machine.tick()
        self.assertEqual(0x202, self.machine.pc)
        self.assertEqual(0, self.machine.stack_pointer)

    def test_return_with_empty_stack(self):
        load_program(self.machine,0x00EE)
        self.assertRaises(StackUnderflowException, self.machine.tick)
        machine = Chip8()
        load_program(machine,0x00EE)
        self.assertRaises(InterpreterException, machine.tick)

    def test_stack_overflow(self):
        # Subroutine that calls itself forever
        load_program(self.machine,0x2200)
        for i in range(0,STACK_SIZE):
            self.machine.tick()
        self.assertEqual(STACK_SIZE, self.machine.stack_pointer)
        self.assertRaises(StackOverflowException, self.machine.tick)

    def test_skip_if_equal_immediate(self):
        self.machine.registers[1] = 0x42
        load_program(self.machine,0x3142)
        self.machine.tick()
        self.assertEqual(0x204, self.machine.pc)

        machine = Chip8()
        load_program(machine,0x3142)
        machine.tick()
        self.assertEqual(0x202, machine.pc)

    def test_skip_if_not_equal_immediate(self):
        self.machine.registers[1] = 0x42
        load_program(self.machine,0x4142)
        self.machine.tick()
        self.assertEqual(0x202, self.machine.pc)

        machine = Chip8()
        load_program(machine,0x4142)
        machine.tick()
        self.assertEqual(0x204, machine.pc)

    def test_skip_if_registers_equal(self):
        self.machine.registers[1] = 3
        self.machine.registers[2] = 3
        load_program(self.machine,0x5120)
        self.machine.tick()
        self.assertEqual(0x204, self.machine.pc)

        machine = Chip8()
        machine.registers[2] = 3
        load_program(machine,0x5120)
        machine.tick()
        self.assertEqual(0x202, machine.pc)

    def test_skip_runs_following_instruction(self):
        # SE V0, 0x00 skips LD V1, 0x01 and lands on LD V2, 0x02
        load_program(self.machine,0x3000,0x6101,0x6202)
        self.machine.tick()
        self.machine.tick()
        self.assertEqual(0, self.machine.registers[1])
        self.assertEqual(2, self.machine.registers[2])

    def test_add_immediate_wraps_without_carry(self):
        self.machine.registers[1] = 0xFF
        self.machine.registers[0xF] = 0x55
        load_program(self.machine,0x7102)
        self.machine.tick()
        self.assertEqual(0x01, self.machine.registers[1])
        self.assertEqual(0x55, self.machine.registers[0xF])

    def test_copy_register(self):
        self.machine.registers[2] = 0x99
        load_program(self.machine,0x8120)
        self.machine.tick()
        self.assertEqual(0x99, self.machine.registers[1])
        self.assertEqual(0x99, self.machine.registers[2])

    def test_or(self):
        self.machine.registers[1] = 0x0F
        self.machine.registers[2] = 0xF0
        load_program(self.machine,0x8121)
        self.machine.tick()
        self.assertEqual(0xFF, self.machine.registers[1])
        self.assertEqual(0xF0, self.machine.registers[2])

    def test_and(self):
        self.machine.registers[1] = 0x3C
        self.machine.registers[2] = 0x0F
        load_program(self.machine,0x8122)
        self.machine.tick()
        self.assertEqual(0x0C, self.machine.registers[1])

    def test_xor(self):
        self.machine.registers[1] = 0x3C
        self.machine.registers[2] = 0x0F
        load_program(self.machine,0x8123)
        self.machine.tick()
        self.assertEqual(0x33, self.machine.registers[1])

    def test_add_with_carry(self):
        for vx,vy in ((0,0),(1,2),(0x7F,0x80),(0x80,0x80),(0xFF,0x01),(0xFF,0xFF),(0xC8,0x37)):
            machine = Chip8()
            machine.registers[1] = vx
            machine.registers[2] = vy
            load_program(machine,0x8124)
            machine.tick()
            self.assertEqual((vx+vy) % 256, machine.registers[1], '%d + %d' % (vx,vy))
            self.assertEqual(1 if vx+vy > 255 else 0, machine.registers[0xF], '%d + %d' % (vx,vy))

    def test_add_with_carry_clears_flag(self):
        self.machine.registers[0xF] = 1
        self.machine.registers[1] = 1
        self.machine.registers[2] = 1
        load_program(self.machine,0x8124)
        self.machine.tick()
        self.assertEqual(0, self.machine.registers[0xF])

    def test_add_with_carry_into_flag_register(self):
        self.machine.registers[0xF] = 0xFF
        self.machine.registers[1] = 0x01
        load_program(self.machine,0x8F14)
        self.machine.tick()
        self.assertEqual(1, self.machine.registers[0xF])

    def test_logs_instructions(self):
        load_program(self.machine,0x6005)
        with self.assertLogs('chip8.interpreter', level='DEBUG') as logs:
            self.machine.tick()
        self.assertIn('0200: 6005 LD V0, 0x05', logs.output[0])

class TimerTests(unittest.TestCase):
    def setUp(self):
        self.speaker = TestSpeaker()
        self.machine = Chip8(speaker=self.speaker)

    def test_delay_timer(self):
        self.machine.tick_timers()
        self.assertEqual(0, self.machine.delay_timer)
        self.machine.delay_timer = 5
        self.machine.tick_timers()
        self.assertEqual(4, self.machine.delay_timer)

    def test_sound_timer_beeps_once(self):
        self.machine.sound_timer = 3
        self.machine.tick_timers()
        self.machine.tick_timers()
        self.assertEqual(1, self.machine.sound_timer)
        self.assertEqual(0, self.speaker.beeps)
        self.machine.tick_timers()
        self.assertEqual(0, self.machine.sound_timer)
        self.assertEqual(1, self.speaker.beeps)
        for i in range(0,5):
            self.machine.tick_timers()
        self.assertEqual(0, self.machine.sound_timer)
        self.assertEqual(1, self.speaker.beeps)

    def test_sound_timer_beeps_per_transition(self):
        self.machine.sound_timer = 1
        self.machine.tick_timers()
        self.machine.sound_timer = 1
        self.machine.tick_timers()
        self.assertEqual(2, self.speaker.beeps)

    def test_timers_are_independent(self):
        self.machine.delay_timer = 2
        self.machine.sound_timer = 0
        self.machine.tick_timers()
        self.assertEqual(1, self.machine.delay_timer)
        self.assertEqual(0, self.machine.sound_timer)
        self.assertEqual(0, self.speaker.beeps)

    def test_default_speaker(self):
        machine = Chip8()
        machine.sound_timer = 1
        machine.tick_timers()
        self.assertEqual(0, machine.sound_timer)

class RomTests(unittest.TestCase):
    def test_load(self):
        machine = Chip8()
        rom = Rom(b'\x60\x05\x00\xe0')
        rom.load_into(machine)
        self.assertEqual(0x6005, machine.memory.word(ENTRY_ADDRESS))
        self.assertEqual(0x00E0, machine.memory.word(ENTRY_ADDRESS+2))
        self.assertEqual(4, len(rom))
        machine.tick()
        self.assertEqual(5, machine.registers[0])

    def test_empty(self):
        self.assertRaises(RomFileException, Rom(b'').load_into, Chip8())

    def test_size_limit(self):
        Rom(bytes(Rom.MAX_SIZE)).load_into(Chip8())
        self.assertEqual(3584, Rom.MAX_SIZE)
        self.assertRaises(RomFileException, Rom(bytes(Rom.MAX_SIZE+1)).load_into, Chip8())

    def test_checksum(self):
        self.assertEqual(0x65, Rom(b'\x60\x05').checksum())
        self.assertEqual(0x1FE, Rom(b'\xff\xff').checksum())

    def test_from_path(self):
        with tempfile.NamedTemporaryFile(suffix='.ch8',delete=False) as f:
            f.write(b'\x12\x00')
            path = f.name
        try:
            rom = Rom.from_path(path)
            self.assertEqual(b'\x12\x00', rom.rom_data)
            self.assertEqual(path, rom.name)
        finally:
            os.remove(path)

class GenericTerpTests(unittest.TestCase):
    def test_build_settings(self):
        settings = build_settings()
        self.assertEqual(SETTINGS, settings)
        self.assertFalse(settings is SETTINGS)

        settings = build_settings(scale=None,instructions_per_tick='20')
        self.assertEqual(SETTINGS['scale'], settings['scale'])
        self.assertEqual(20, settings['instructions_per_tick'])

    def test_build_settings_invalid(self):
        self.assertRaises(ConfigException, build_settings, scale=0)
        self.assertRaises(ConfigException, build_settings, instructions_per_tick='fast')
        self.assertRaises(ConfigException, build_settings, colour='red')

    def test_key_for_char(self):
        self.assertEqual(0x1, key_for_char('1'))
        self.assertEqual(0xC, key_for_char('4'))
        self.assertEqual(0x4, key_for_char('Q'))
        self.assertEqual(0x0, key_for_char('x'))
        self.assertEqual(0xF, key_for_char('v'))
        self.assertEqual(None, key_for_char('p'))
        self.assertEqual(None, key_for_char(''))
        self.assertEqual(None, key_for_char(None))

    def test_render_text(self):
        machine = Chip8()
        machine.framebuffer[0] = True
        machine.framebuffer[SCREEN_WIDTH*SCREEN_HEIGHT-1] = True
        lines = render_text(machine.framebuffer)
        self.assertEqual(SCREEN_HEIGHT, len(lines))
        self.assertEqual('#' + ' '*(SCREEN_WIDTH-1), lines[0])
        self.assertEqual(' '*(SCREEN_WIDTH-1) + '#', lines[-1])
        self.assertEqual('.'*SCREEN_WIDTH, render_text(Chip8().framebuffer,off='.')[5])

    def test_load_and_restart_machine(self):
        with tempfile.NamedTemporaryFile(suffix='.ch8',delete=False) as f:
            f.write(b'\x60\x05')
            path = f.name
        try:
            speaker = TestSpeaker()
            machine,rom = load_machine(path,speaker=speaker)
            self.assertTrue(machine.speaker is speaker)
            machine.tick()
            self.assertEqual(5, machine.registers[0])

            restart_machine(machine,rom)
            self.assertEqual(ENTRY_ADDRESS, machine.pc)
            self.assertEqual(0, machine.registers[0])
            self.assertEqual(0x6005, machine.memory.word(ENTRY_ADDRESS))
        finally:
            os.remove(path)

    def test_tracer(self):
        with tempfile.NamedTemporaryFile(suffix='.trace',delete=False) as f:
            path = f.name
        stream = io.StringIO()
        console = logging.StreamHandler(stream)
        root = logging.getLogger()
        root.addHandler(console)
        interpreter_logger = logging.getLogger('chip8.interpreter')
        try:
            tracer = Tracer(path)
            tracer.start()
            machine = Chip8()
            load_program(machine,0x6005)
            machine.tick()
            tracer.stop()
            with open(path,'r') as f:
                self.assertIn('0200: 6005 LD V0, 0x05', f.read())

            # Traced instructions go to the file only, never to the console
            self.assertEqual('', stream.getvalue())
            self.assertTrue(interpreter_logger.propagate)
        finally:
            root.removeHandler(console)
            os.remove(path)

class CursesTerpTests(unittest.TestCase):
    def test_half_block_lines(self):
        framebuffer = [False] * (SCREEN_WIDTH*SCREEN_HEIGHT)
        framebuffer[0] = True               # (0,0)
        framebuffer[SCREEN_WIDTH] = True    # (0,1)
        framebuffer[1] = True               # (1,0)
        framebuffer[SCREEN_WIDTH+2] = True  # (2,1)
        lines = half_block_lines(framebuffer)
        self.assertEqual(SCREEN_HEIGHT // 2, len(lines))
        self.assertEqual(FULL_BLOCK + UPPER_HALF + LOWER_HALF + ' ', lines[0][0:4])
        self.assertEqual(' '*SCREEN_WIDTH, lines[1])

    def test_keypad_holds_keys(self):
        machine = Chip8()
        keypad = CursesKeypad(machine,hold_ticks=2)
        self.assertTrue(keypad.char_pressed('w'))
        self.assertTrue(machine.keys[0x5])
        keypad.tick()
        self.assertTrue(machine.keys[0x5])
        keypad.tick()
        self.assertFalse(machine.keys[0x5])
        self.assertFalse(keypad.char_pressed('p'))
        self.assertFalse(any(machine.keys))

class StubScreen(object):
    def __init__(self):
        self.draws = 0

    def draw(self,framebuffer):
        self.draws += 1

class StubDebugger(object):
    def __init__(self):
        self.is_active = False

    def activate(self):
        self.is_active = True

    def deactivate(self):
        self.is_active = False

class PlayerTerpTests(unittest.TestCase):
    def setUp(self):
        self.machine = Chip8()
        self.rom = Rom(b'\x60\x01\x70\x01\x70\x01\x70\x01')
        self.rom.load_into(self.machine)
        self.terp = PlayerTerp(self.machine,self.rom,build_settings(instructions_per_tick=3))

    def test_idle_runs_one_frame(self):
        self.machine.delay_timer = 5
        self.terp.idle()
        self.assertEqual(0x206, self.machine.pc)
        self.assertEqual(3, self.machine.registers[0])
        self.assertEqual(4, self.machine.delay_timer)

    def test_paused(self):
        self.machine.delay_timer = 5
        self.terp.toggle_pause()
        self.assertEqual(PlayerRunState.PAUSED, self.terp.state)
        self.terp.idle()
        self.assertEqual(ENTRY_ADDRESS, self.machine.pc)
        self.assertEqual(5, self.machine.delay_timer)

        self.terp.toggle_pause()
        self.assertEqual(PlayerRunState.RUNNING, self.terp.state)
        self.terp.idle()
        self.assertEqual(0x206, self.machine.pc)

    def test_restart(self):
        self.terp.idle()
        self.terp.pause()
        self.terp.restart()
        self.assertEqual(PlayerRunState.RUNNING, self.terp.state)
        self.assertEqual(ENTRY_ADDRESS, self.machine.pc)
        self.assertEqual(0, self.machine.registers[0])
        self.assertEqual(0x6001, self.machine.memory.word(ENTRY_ADDRESS))

    def test_paused_title(self):
        # Skips __init__, which would open a window
        ui = PygameUI.__new__(PygameUI)
        ui.title = 'pong.ch8'
        titles = []
        ui.set_title = titles.append
        ui.show_paused(True)
        ui.show_paused(False)
        self.assertEqual(['pong.ch8 [PAUSED]','pong.ch8'], titles)

class DebugTerpTests(unittest.TestCase):
    def setUp(self):
        self.machine = Chip8()
        self.debugger = StubDebugger()
        self.screen = StubScreen()
        self.keypad = CursesKeypad(self.machine,hold_ticks=1)
        self.terp = DebugTerp(self.machine,self.debugger,self.screen,self.keypad,2)

    def test_step(self):
        self.machine.delay_timer = 5
        self.keypad.char_pressed('w')

        self.terp.step()
        self.assertEqual(0x202, self.machine.pc)
        self.assertEqual(5, self.machine.delay_timer)
        self.assertTrue(self.machine.keys[0x5])
        self.assertEqual(0, self.screen.draws)

        # Second instruction completes a timer tick
        self.terp.step()
        self.assertEqual(0x204, self.machine.pc)
        self.assertEqual(4, self.machine.delay_timer)
        self.assertFalse(self.machine.keys[0x5])
        self.assertEqual(1, self.screen.draws)

    def test_run_until_breakpoint(self):
        self.terp.run_until(breakpoint=0x204)
        self.assertEqual(DebugRunState.RUN_UNTIL_BREAKPOINT, self.terp.state)
        self.terp.idle()
        self.terp.idle()
        self.assertEqual(0x204, self.machine.pc)
        self.assertFalse(self.debugger.is_active)

        self.terp.idle()
        self.assertEqual(DebugRunState.PAUSED, self.terp.state)
        self.assertEqual(0x204, self.machine.pc)
        self.assertTrue(self.debugger.is_active)

        self.terp.idle()
        self.assertEqual(0x204, self.machine.pc)

    def test_key_pressed(self):
        self.terp.key_pressed(ord('q'))
        self.assertTrue(self.machine.keys[0x4])
        self.terp.key_pressed(curses.ascii.ESC)
        self.assertEqual(DebugRunState.PAUSED, self.terp.state)
        self.assertTrue(self.debugger.is_active)

    def test_main_rejects_trace_directory(self):
        with tempfile.TemporaryDirectory() as path:
            self.assertEqual(1, debug_main('--file','missing.ch8','--log_level','INFO','--trace_file',path))

class DumpTests(unittest.TestCase):
    def test_disassemble(self):
        machine = Chip8()
        Rom(b'\x60\x05\xff\xff\x22\x00\x81').load_into(machine)
        lines = disassemble(machine.memory,ENTRY_ADDRESS,ENTRY_ADDRESS+7)
        self.assertEqual(['0200: 6005  LD V0, 0x05',
                          '0202: ffff  DW 0xffff',
                          '0204: 2200  CALL 0x200',
                          '0206: 81    DB 0x81'], lines)

if __name__ == '__main__':
    unittest.main()

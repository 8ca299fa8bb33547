import sys
import os
from enum import Enum

import logging
import curses
import curses.ascii
from curses import wrapper

import argparse
import time

from chip8.interpreter import InterpreterException,QuitException,ENTRY_ADDRESS,NUM_REGISTERS
from chip8.memory import MemoryException
from chip8.instructions import InstructionException
from chip8.rom import RomFileException

from generic_terp import SETTINGS,ConfigException,Tracer,build_settings,load_machine,restart_machine
from curses_terp import CursesScreen,CursesKeypad

# Window constants
SCREEN_WINDOW_WIDTH = 66  # 64 columns plus border
SCREEN_WINDOW_HEIGHT = 18 # 16 half-block rows plus border
DEBUGGER_MIN_WIDTH = 44
MIN_HEIGHT = 24

class DebugQuitException(Exception):
    pass

class ResetException(Exception):
    pass

class StepperWindow(object):
    def next_line(self):
        return False

    def previous_line(self):
        return False

    def redraw(self,window,machine,height):
        idx = machine.pc
        try:
            i = 0
            while i < min(10,(height-1)//2):
                handler, description,next_address = machine.instruction_at(idx)
                if i == 0:
                    prefix = " >>> "
                else:
                    prefix = "     "
                window.addstr('%04x: %s\n' %(idx,' '.join(['%02x' % x for x in machine.memory[idx:next_address]])))
                window.addstr("%s%s\n" % (prefix,description,))
                idx = next_address
                i+=1
        except (InstructionException,MemoryException) as e:
            window.addstr('%04x: %s\n' %(idx,' '.join(['%02x' % x for x in machine.memory[idx:idx+2]])))
            window.addstr('%04x: %s\n' %(idx,e))

class MemoryWindow(object):
    def __init__(self):
        self.address = ENTRY_ADDRESS

    def next_line(self):
        self.address += 0x08
        return True

    def previous_line(self):
        self.address -= 0x08
        if self.address < 0:
            self.address = 0
        return True

    def redraw(self,window,machine,height):
        for line in machine.memory.dump(width=8,start_address=self.address,end_address=self.address+(8*(height-1))):
            window.addstr(line + '\n')

class RegistersWindow(object):
    def next_line(self):
        return False

    def previous_line(self):
        return False

    def redraw(self,window,machine,height):
        for i in range(0,NUM_REGISTERS,4):
            window.addstr('  '.join(['V%X=%02x' % (r,machine.registers[r]) for r in range(i,i+4)]) + '\n')
        window.addstr('\n')
        window.addstr('PC=%04x  I=%04x  SP=%d\n' % (machine.pc,machine.address_register,machine.stack_pointer))
        window.addstr('DT=%02x  ST=%02x\n' % (machine.delay_timer,machine.sound_timer))
        window.addstr('Keys: %s\n' % ''.join(['%X' % k if pressed else '.' for k,pressed in enumerate(machine.keys)]))
        window.addstr('\nStack:\n')
        # Registers and timers take the first 10 lines
        for depth in list(range(machine.stack_pointer-1,-1,-1))[:max(0,height-11)]:
            window.addstr('  %2d: %04x\n' % (depth,machine.stack.entries[depth]))

class DebuggerWindow(object):
    def __init__(self, machine,window):
        self.machine = machine
        self.is_active=False
        self.window = window
        self.window_handlers = {'i': StepperWindow(),
                                'm': MemoryWindow(),
                                'v': RegistersWindow()}
        self.current_handler = self.window_handlers['i']
        self.window_height,self.window_width = window.getmaxyx()

    def quit(self):
        raise DebugQuitException()

    def reset(self):
        raise ResetException()

    def key_pressed(self,key,terp):
        """ Key pressed while debugger active """
        ch = chr(key).lower()
        if ch == 'q':
            self.quit()
        elif ch == 'r':
            self.reset()
        elif ch == 's':
            terp.step()
            self.redraw()
        elif ch == 'g':
            self.current_handler = self.window_handlers['i']
            terp.run()
        elif ch == '.' or ch == '>':
            if self.current_handler.next_line():
                self.redraw()
        elif ch == ',' or ch == '<':
            if self.current_handler.previous_line():
                self.redraw()
        else:
            h = self.window_handlers.get(ch)
            if h:
                self.current_handler = h
                self.redraw()

    def activate(self):
        self.is_active=True
        self.redraw()

    def deactivate(self):
        self.is_active=False
        self.redraw()

    def redraw(self):
        curses.curs_set(0) # Hide cursor
        self.window.clear()
        if self.is_active:
            self.window.addstr(0,0,"PAUSED: (Q)uit (R)eset (S)tep (G)o (I)nstr (V)regs (M)em",curses.A_REVERSE)
        else:
            self.window.addstr(0,0,"Hit ESC for control",curses.A_REVERSE)

        self.window.move(2,0)
        if self.current_handler:
            self.current_handler.redraw(self.window, self.machine, self.window_height-3) # 3 is height of header + buffer
        self.window.refresh()

class ErrorWindow(object):
    def __init__(self,window):
        self.window = window

    def error(self,msg):
        self.window.clear()
        self.window.addstr(0, 0, msg[:self.window.getmaxyx()[1]-1], curses.A_REVERSE)
        self.window.refresh()

class RunState(Enum):
    RUNNING              = 0
    PAUSED               = 1
    RUN_UNTIL_BREAKPOINT = 2

class Terp(object):
    def __init__(self,machine,debugger,screen,keypad,instructions_per_tick):
        self.state = RunState.RUNNING
        self.machine = machine
        self.breakpoint = None
        self.debugger = debugger
        self.screen = screen
        self.keypad = keypad
        self.instructions_per_tick = instructions_per_tick
        self.instruction_count = 0

    def run(self):
        if self.state != RunState.RUNNING:
            self.state = RunState.RUNNING
            self.debugger.deactivate()

    def pause(self):
        if self.state != RunState.PAUSED:
            self.state = RunState.PAUSED
            self.debugger.activate()
            self.screen.draw(self.machine.framebuffer)

    def run_until(self,breakpoint=None):
        if self.state != RunState.RUN_UNTIL_BREAKPOINT:
            self.breakpoint=breakpoint
            self.state = RunState.RUN_UNTIL_BREAKPOINT
            self.debugger.deactivate()

    def step(self):
        """ Run one instruction. Timers tick once every instructions_per_tick instructions """
        self.machine.tick()
        self.instruction_count += 1
        if self.instruction_count % self.instructions_per_tick == 0:
            self.machine.tick_timers()
            self.keypad.tick()
            self.screen.draw(self.machine.framebuffer)

    def idle(self):
        """ Called if no key is pressed """
        if self.state == RunState.RUNNING:
            self.step()
        elif self.state == RunState.RUN_UNTIL_BREAKPOINT:
            if self.breakpoint is not None and self.machine.pc == self.breakpoint:
                self.pause()
            else:
                self.step()

    def key_pressed(self,ch):
        if self.state == RunState.RUNNING or self.state == RunState.RUN_UNTIL_BREAKPOINT:
            if ch == curses.ascii.ESC:
                self.pause()
            elif 0 <= ch < 256:
                self.keypad.char_pressed(chr(ch))
        elif self.state == RunState.PAUSED:
            self.debugger.key_pressed(ch,self)

class MainLoop(object):
    def __init__(self,machine,rom,breakpoint,settings):
        self.machine = machine
        self.rom = rom
        self.breakpoint = breakpoint
        self.settings = settings

    def loop(self,stdscr):
        # Disable automatic echo
        curses.noecho()

        # Use unbufferd input
        curses.cbreak()

        screen_height,screen_width = stdscr.getmaxyx()
        if screen_width < SCREEN_WINDOW_WIDTH + DEBUGGER_MIN_WIDTH:
            raise ConfigException('Terminal must be at least %d characters wide' % (SCREEN_WINDOW_WIDTH + DEBUGGER_MIN_WIDTH))
        if screen_height < MIN_HEIGHT:
            raise ConfigException('Terminal must be at least %d characters in height' % MIN_HEIGHT)

        # The framebuffer, inside a border
        border = curses.newwin(SCREEN_WINDOW_HEIGHT,SCREEN_WINDOW_WIDTH,0,0)
        border.box()
        border.refresh()
        screen = CursesScreen(curses.newwin(SCREEN_WINDOW_HEIGHT-2,SCREEN_WINDOW_WIDTH-2,1,1))

        # The debugger window
        debugger = DebuggerWindow(self.machine,
                                curses.newwin(screen_height-2,
                                 screen_width-SCREEN_WINDOW_WIDTH-1,
                                 0,
                                 SCREEN_WINDOW_WIDTH+1))
        debugger.redraw()
        debugger.window.timeout(0)
        debugger.window.keypad(True)

        keypad = CursesKeypad(self.machine)
        terp = Terp(self.machine,debugger,screen,keypad,self.settings['instructions_per_tick'])
        if self.breakpoint is not None:
            terp.run_until(breakpoint=self.breakpoint)
        else:
            terp.run()

        # Area for error messages
        error_window = ErrorWindow(curses.newwin(2,
                                screen_width-SCREEN_WINDOW_WIDTH-1,
                                screen_height-2,
                                SCREEN_WINDOW_WIDTH+1))

        while True:
            try:
                ch = debugger.window.getch()
                if ch == curses.ERR and terp.state == RunState.PAUSED:
                    time.sleep(0.01)
                elif ch == curses.ERR:
                    terp.idle()
                    if terp.instruction_count % self.settings['instructions_per_tick'] == 0:
                        time.sleep(1.0 / self.settings['timer_frequency'])
                else:
                    terp.key_pressed(ch)
            except (InstructionException,MemoryException,InterpreterException) as e:
                error_window.error('%s at PC 0x%04x [%s]' % (e,self.machine.pc,self.machine.last_instruction))
                terp.pause()
            except (DebugQuitException,ResetException):
                raise
            except Exception as e:
                raise Exception('Unhandled exception "%s" at PC 0x%04x [%s]' % (e,self.machine.pc,self.machine.last_instruction),e)

def parse_address(value):
    """ Breakpoints are given in hex, with or without a 0x prefix """
    if value is None:
        return None
    try:
        return int(value,16)
    except ValueError:
        raise ConfigException('Breakpoint %s is not a hex address' % value)

def start(machine,rom,breakpoint,settings):
    loop = MainLoop(machine,rom,breakpoint,settings)
    wrapper(loop.loop)

def main(*args):
    parser = argparse.ArgumentParser()
    parser.add_argument('--file',required=True,help='ROM file to debug')
    parser.add_argument('--breakpoint',help='Hex address at which to pause')
    parser.add_argument('--speed',type=int,help='Instructions run per timer tick (default %d)' % SETTINGS['instructions_per_tick'])
    parser.add_argument('--log_file',help='Optional file to log to, since the terminal belongs to curses')
    parser.add_argument('--log_level',help='Logging level for the log file (DEBUG, INFO, WARNING...)',default='DEBUG')
    parser.add_argument('--trace_file',help='Path to file to which the terp will log every executed instruction')
    data = parser.parse_args(args or None)

    if data.log_file:
        logging.basicConfig(filename=data.log_file,level=getattr(logging,data.log_level.upper(),logging.DEBUG))

    tracer = None
    try:
        if data.trace_file:
            if os.path.isdir(data.trace_file):
                raise ConfigException('Trace path must be to a file, not a directory')
            tracer = Tracer(data.trace_file)
            tracer.start()
        settings = build_settings(instructions_per_tick=data.speed)
        breakpoint = parse_address(data.breakpoint)
        machine,rom = load_machine(data.file)
        while True:
            try:
                start(machine,rom,breakpoint,settings)
            except ResetException:
                print("Resetting...")
                restart_machine(machine,rom)
                time.sleep(1)
    except (DebugQuitException,QuitException):
        print("Thanks for playing!")
    except (ConfigException,RomFileException,OSError) as e:
        print(e)
        return 1
    finally:
        if tracer:
            tracer.stop()
    return 0

if __name__ == "__main__":
    sys.exit(main())
